# backend/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from config import Settings, settings as default_settings
from database import StorageError
from models.cart import CartStore
from models.product import ProductStore

# Import routerów
from routes.cart import router as cart_router
from routes.products import router as products_router

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or default_settings
    logging.basicConfig(level=app_settings.LOG_LEVEL.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One store per collection, shared by every request
        app.state.product_store = ProductStore(app_settings.products_path)
        app.state.cart_store = CartStore(app_settings.carts_path)
        logger.info("Stores ready in %s", app_settings.DATA_DIR)
        yield

    app = FastAPI(title="Catalog & Cart API", version="1.0.0", lifespan=lifespan)
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Storage error"})

    # Rejestracja routerów
    app.include_router(products_router)
    app.include_router(cart_router)

    @app.get("/")
    def read_root():
        return {"message": "Catalog & Cart API is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=default_settings.PORT)
