"""
Hadith Endpoints

GET /v1/hadith/collections             - known collections
GET /v1/hadith/{collection}/{number}   - one hadith; 404 when absent
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.api.deps import get_hadith_service
from src.api.schemas import HadithSchema, Locale
from src.core.exceptions import NotFoundError
from src.lookup.hadith import HADITH_COLLECTIONS, HadithLookupService, find_collection
from src.lookup.models import HadithGrade


class CollectionSchema(BaseModel):
    slug: str
    name: str
    grade: HadithGrade


class HadithResponse(BaseModel):
    hadith: HadithSchema
    collection_name: str


hadith_router = APIRouter(prefix="/v1/hadith", tags=["hadith"])


@hadith_router.get("/collections", response_model=list[CollectionSchema])
async def list_collections() -> list[CollectionSchema]:
    return [
        CollectionSchema(slug=c.slug, name=c.name, grade=c.grade)
        for c in HADITH_COLLECTIONS
    ]


@hadith_router.get("/{collection}/{number}", response_model=HadithResponse)
async def get_hadith(
    collection: str,
    number: str,
    lang: Locale = Query(default=Locale.EN),
    service: HadithLookupService = Depends(get_hadith_service),
) -> HadithResponse:
    """Read one hadith.

    The lookup never raises; any upstream problem surfaces here as a 404.
    """
    hadith = await service.get_hadith(collection, number)
    if hadith is None:
        raise NotFoundError(f"hadith {collection}:{number}")

    known = find_collection(collection)
    return HadithResponse(
        hadith=HadithSchema.from_result(hadith, lang),
        collection_name=known.name if known else collection,
    )
