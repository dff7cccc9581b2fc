"""Image Routes — uploaded media streamed from the object store.

Invariants:
    - Responses carry the object's etag, length and long-lived cache headers
    - The body is streamed in chunks from the store
    - Absent objects are 404 "Image not found"; an unconfigured store is 500
"""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from wildwatch.api.dependencies import get_object_store
from wildwatch.core.errors import ResourceNotFoundError
from wildwatch.core.repository_protocols import ObjectStore

router = APIRouter(tags=["images"])

CACHE_CONTROL = "public, max-age=86400"
CDN_CACHE_CONTROL = "max-age=604800"


@router.get("/images/uploads/{file_id:path}")
async def get_uploaded_image(
    file_id: str, store: ObjectStore = Depends(get_object_store),
):
    stored = await store.get(f"uploads/{file_id}")
    if stored is None:
        raise ResourceNotFoundError("Image", file_id)
    headers = {
        "etag": stored.etag,
        "cache-control": CACHE_CONTROL,
        "cdn-cache-control": CDN_CACHE_CONTROL,
        "content-length": str(stored.size),
    }
    return StreamingResponse(
        store.iter_bytes(stored), media_type=stored.content_type, headers=headers,
    )
