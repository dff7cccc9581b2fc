"""Local object store — key resolution, metadata, chunked reads and traversal rejection."""

import hashlib

from wildwatch.infrastructure.object_store import DEFAULT_CONTENT_TYPE, LocalObjectStore


async def _read_all(store, stored) -> list[bytes]:
    return [chunk async for chunk in store.iter_bytes(stored)]


async def test_reads_object_with_metadata(tmp_path):
    (tmp_path / "uploads").mkdir()
    (tmp_path / "uploads" / "owl.png").write_bytes(b"png-bytes")
    store = LocalObjectStore(tmp_path)

    stored = await store.get("uploads/owl.png")

    assert stored.content_type == "image/png"
    assert stored.size == len(b"png-bytes")
    assert stored.etag == f'"{hashlib.md5(b"png-bytes").hexdigest()}"'
    assert stored.last_modified is not None
    assert b"".join(await _read_all(store, stored)) == b"png-bytes"


async def test_body_is_streamed_in_chunks(tmp_path):
    body = bytes(range(256)) * 10
    (tmp_path / "badger.jpg").write_bytes(body)
    store = LocalObjectStore(tmp_path, chunk_size=1000)

    stored = await store.get("badger.jpg")
    chunks = await _read_all(store, stored)

    assert [len(c) for c in chunks] == [1000, 1000, 560]
    assert b"".join(chunks) == body
    assert stored.etag == f'"{hashlib.md5(body).hexdigest()}"'


async def test_empty_object_yields_nothing(tmp_path):
    (tmp_path / "empty.jpg").write_bytes(b"")
    store = LocalObjectStore(tmp_path)

    stored = await store.get("empty.jpg")

    assert stored.size == 0
    assert await _read_all(store, stored) == []


async def test_unknown_extension_is_octet_stream(tmp_path):
    (tmp_path / "blob").write_bytes(b"\x00")
    stored = await LocalObjectStore(tmp_path).get("blob")
    assert stored.content_type == DEFAULT_CONTENT_TYPE


async def test_missing_object_is_none(tmp_path):
    assert await LocalObjectStore(tmp_path).get("uploads/nothing.jpg") is None


async def test_keys_cannot_escape_root(tmp_path):
    root = tmp_path / "store"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("top secret")

    store = LocalObjectStore(root)

    assert await store.get("../secret.txt") is None
    assert await store.get("") is None
