"""
Dependency providers for the API routers.

Gateways are process-wide singletons (one pooled HTTP client per provider),
built from settings on first use and closed by the application lifespan.
Services and the aggregator are cheap wrappers built per request. Tests swap
any of these through app.dependency_overrides.
"""

from fastapi import Depends

from src.clients.gateway import ContentGateway, ContentGatewayProtocol
from src.core.config import Settings, get_settings
from src.lookup.hadith import HadithLookupService
from src.lookup.quran import QuranLookupService
from src.search.aggregator import SearchAggregator

_quran_gateway: ContentGateway | None = None
_hadith_gateway: ContentGateway | None = None


def get_quran_gateway() -> ContentGatewayProtocol:
    """Get the shared gateway for the Quran provider."""
    global _quran_gateway
    if _quran_gateway is None:
        settings = get_settings()
        _quran_gateway = ContentGateway(
            settings.quran_api_url,
            name="quran",
            timeout=settings.request_timeout,
        )
    return _quran_gateway


def get_hadith_gateway() -> ContentGatewayProtocol:
    """Get the shared gateway for the Hadith provider (carries the API key)."""
    global _hadith_gateway
    if _hadith_gateway is None:
        settings = get_settings()
        _hadith_gateway = ContentGateway(
            settings.hadith_api_url,
            name="hadith",
            timeout=settings.request_timeout,
            default_params={"apiKey": settings.hadith_api_key},
        )
    return _hadith_gateway


async def close_gateways() -> None:
    """Close and forget both gateway singletons."""
    global _quran_gateway, _hadith_gateway
    for gateway in (_quran_gateway, _hadith_gateway):
        if gateway is not None:
            await gateway.close()
    _quran_gateway = None
    _hadith_gateway = None


def get_quran_service(
    gateway: ContentGatewayProtocol = Depends(get_quran_gateway),
    settings: Settings = Depends(get_settings),
) -> QuranLookupService:
    return QuranLookupService(
        gateway,
        default_translation=settings.default_translation,
        max_matches=settings.max_quran_matches,
        max_concurrent_fetches=settings.max_concurrent_fetches,
    )


def get_hadith_service(
    gateway: ContentGatewayProtocol = Depends(get_hadith_gateway),
    settings: Settings = Depends(get_settings),
) -> HadithLookupService:
    return HadithLookupService(gateway, search_limit=settings.hadith_search_limit)


def get_search_aggregator(
    quran: QuranLookupService = Depends(get_quran_service),
    hadith: HadithLookupService = Depends(get_hadith_service),
    settings: Settings = Depends(get_settings),
) -> SearchAggregator:
    return SearchAggregator(
        quran,
        hadith,
        page_size=settings.page_size,
        source_timeout=settings.source_timeout,
    )
