"""Category listing endpoints."""

from fastapi import APIRouter

from blogsearch.models.search import CategoryOptions
from blogsearch.services.blob_storage import get_blog_categories

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryOptions)
async def list_category_options():
    """Category id to name mapping, for building a category filter."""
    categories = await get_blog_categories()
    return CategoryOptions(categories={c.id: c.name for c in categories})
