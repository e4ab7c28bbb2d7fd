# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    # Directory holding the collection documents
    DATA_DIR: str = "data"
    PRODUCTS_FILE: str = "products.json"
    CARTS_FILE: str = "carts.json"

    LOG_LEVEL: str = "INFO"
    PORT: int = 8080

    class Config:
        env_file: ClassVar[str] = str(env_path)

    @property
    def products_path(self) -> Path:
        return Path(self.DATA_DIR) / self.PRODUCTS_FILE

    @property
    def carts_path(self) -> Path:
        return Path(self.DATA_DIR) / self.CARTS_FILE

settings = Settings()
