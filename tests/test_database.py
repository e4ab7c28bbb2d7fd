import asyncio
import json
import os
import stat

import pytest

from database import CollectionFile, StorageError
from schemas.cart import Cart, CartLineItem


def test_missing_file_is_created_empty(tmp_path):
    path = tmp_path / "nested" / "carts.json"
    CollectionFile(path, Cart)
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_ensure_initialized_keeps_existing_document(tmp_path):
    path = tmp_path / "carts.json"
    path.write_text('[{"id": 7, "products": []}]', encoding="utf-8")

    collection = CollectionFile(path, Cart)
    collection.ensure_initialized()

    assert json.loads(path.read_text(encoding="utf-8")) == [{"id": 7, "products": []}]


async def test_saved_collection_reloads_in_order(tmp_path):
    collection = CollectionFile(tmp_path / "carts.json", Cart)
    carts = [
        Cart(id=2, products=[CartLineItem(product=42, quantity=3)]),
        Cart(id=1, products=[]),
    ]
    await collection.save_all(carts)

    assert await collection.load_all() == carts


async def test_save_writes_pretty_printed_json(tmp_path):
    path = tmp_path / "carts.json"
    collection = CollectionFile(path, Cart)
    await collection.save_all([Cart(id=1)])

    text = path.read_text(encoding="utf-8")
    assert "\n  " in text
    assert json.loads(text) == [{"id": 1, "products": []}]
    # No temp files left behind by the atomic replace
    assert [p.name for p in tmp_path.iterdir()] == ["carts.json"]


def test_next_id():
    assert CollectionFile.next_id([]) == 1
    assert CollectionFile.next_id([Cart(id=1), Cart(id=5), Cart(id=3)]) == 6


async def test_unparseable_document_raises_storage_error(tmp_path):
    path = tmp_path / "carts.json"
    collection = CollectionFile(path, Cart)
    path.write_text("not json at all", encoding="utf-8")

    with pytest.raises(StorageError):
        await collection.load_all()


async def test_document_with_wrong_shape_raises_storage_error(tmp_path):
    path = tmp_path / "carts.json"
    collection = CollectionFile(path, Cart)
    path.write_text('{"id": 1}', encoding="utf-8")

    with pytest.raises(StorageError):
        await collection.load_all()


async def test_unreadable_and_unwritable_path_raises_storage_error(tmp_path):
    # A directory in place of the file can be neither read nor replaced
    path = tmp_path / "carts.json"
    path.mkdir()
    collection = CollectionFile(path, Cart)

    with pytest.raises(StorageError):
        await collection.load_all()
    with pytest.raises(StorageError):
        await collection.save_all([Cart(id=1)])


async def test_transaction_saves_changes(tmp_path):
    collection = CollectionFile(tmp_path / "carts.json", Cart)

    async with collection.transaction() as carts:
        carts.append(Cart(id=collection.next_id(carts)))

    assert await collection.load_all() == [Cart(id=1)]


async def test_failed_transaction_writes_nothing(tmp_path):
    collection = CollectionFile(tmp_path / "carts.json", Cart)

    with pytest.raises(RuntimeError):
        async with collection.transaction() as carts:
            carts.append(Cart(id=1))
            raise RuntimeError("boom")

    assert await collection.load_all() == []


async def test_concurrent_transactions_do_not_lose_updates(tmp_path):
    collection = CollectionFile(tmp_path / "carts.json", Cart)

    async def add_one():
        async with collection.transaction() as carts:
            carts.append(Cart(id=collection.next_id(carts)))

    await asyncio.gather(*(add_one() for _ in range(20)))

    carts = await collection.load_all()
    assert [c.id for c in carts] == list(range(1, 21))


def test_new_document_follows_umask(tmp_path):
    old_umask = os.umask(0)
    os.umask(old_umask)
    path = tmp_path / "carts.json"
    CollectionFile(path, Cart)

    assert stat.S_IMODE(path.stat().st_mode) == 0o666 & ~old_umask


async def test_save_keeps_existing_file_mode(tmp_path):
    path = tmp_path / "carts.json"
    collection = CollectionFile(path, Cart)
    os.chmod(path, 0o640)

    await collection.save_all([Cart(id=1)])

    assert stat.S_IMODE(path.stat().st_mode) == 0o640
