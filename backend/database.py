# backend/database.py
import asyncio
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Generic, List, Type, TypeVar, Union

from fastapi import Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Process umask, read once at import
_UMASK = os.umask(0)
os.umask(_UMASK)


class StorageError(Exception):
    """Raised when a collection document cannot be read or written."""


class CollectionFile(Generic[T]):
    """
    Whole-document persistence for an ordered list of records backed by one
    JSON file. Every mutation is a full load -> in-memory change -> full
    rewrite; the file is replaced atomically so readers never see a
    half-written document.

    Records must expose an integer ``id``.
    """

    def __init__(self, path: Union[str, Path], model: Type[T]):
        self.path = Path(path)
        self.model = model
        self._adapter = TypeAdapter(List[model])
        # Serialises load-mutate-save cycles on this collection
        self._lock = asyncio.Lock()
        self.ensure_initialized()

    def ensure_initialized(self) -> None:
        # Create the document with an empty array if it is missing
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write_atomic(b"[]")
        except OSError as e:
            logger.error("Error creating collection file %s: %s", self.path, e)
            raise StorageError(f"Could not create {self.path}") from e
        logger.info("Created empty collection file %s", self.path)

    async def load_all(self) -> List[T]:
        try:
            raw = await run_in_threadpool(self.path.read_bytes)
            return self._adapter.validate_json(raw)
        except (OSError, ValidationError) as e:
            logger.error("Error reading collection file %s: %s", self.path, e)
            raise StorageError(f"Could not read {self.path}") from e

    async def save_all(self, items: List[T]) -> None:
        payload = self._adapter.dump_json(items, indent=2)
        try:
            await run_in_threadpool(self._write_atomic, payload)
        except OSError as e:
            logger.error("Error writing collection file %s: %s", self.path, e)
            raise StorageError(f"Could not write {self.path}") from e

    @staticmethod
    def next_id(items: List[T]) -> int:
        return max((item.id for item in items), default=0) + 1

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[List[T]]:
        """
        Hold the collection lock, yield the current records for in-place
        changes and write them back when the block exits cleanly.
        """
        async with self._lock:
            items = await self.load_all()
            yield items
            await self.save_all(items)

    def _file_mode(self) -> int:
        # Keep the mode of an existing document, otherwise follow the umask
        try:
            return self.path.stat().st_mode & 0o777
        except FileNotFoundError:
            return 0o666 & ~_UMASK

    def _write_atomic(self, payload: bytes) -> None:
        mode = self._file_mode()
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                os.fchmod(fh.fileno(), mode)
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


# Dependencies - stores are built once in main.create_app and kept on app.state
def get_product_store(request: Request):
    return request.app.state.product_store

def get_cart_store(request: Request):
    return request.app.state.cart_store
