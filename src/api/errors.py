"""
Error presentation and HTTP exception handlers.

describe_source_error turns a failure reason into a short bilingual notice
(status code, message, hint) so a renderer can show which source degraded
and why. The exception handlers map the domain taxonomy onto HTTP:

- NotFoundError      -> 404
- DualSourceFailure  -> 502 with one notice per source
- GatewayError       -> 502 with one notice
"""

from typing import Final

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.api.schemas import Locale
from src.core.exceptions import DualSourceFailure, GatewayError, NotFoundError
from src.core.logging import get_logger

logger = get_logger(__name__)

# (english, arabic) pairs
_MESSAGES: Final[dict[str, tuple[str, str]]] = {
    "unreachable": ("Could not connect to server", "تعذّر الاتصال بالخادم"),
    "unreachable_hint": ("Network error", "تحقق من اتصالك بالإنترنت."),
    "not_found": ("Content not found", "لم يُعثر على هذا المحتوى"),
    "rate_limited": ("Too many requests", "طلبات كثيرة جداً"),
    "rate_limited_hint": ("Wait a moment and try again.", "انتظر لحظة وأعد المحاولة."),
    "unavailable": ("Service temporarily unavailable", "الخدمة غير متاحة مؤقتاً"),
    "server_error": ("Server error", "خطأ في الخادم"),
    "unexpected": ("Unexpected error", "خطأ غير متوقع"),
    "connection": ("Connection error", "خطأ في الاتصال"),
    "connection_hint": (
        "Check your connection and try again.",
        "تحقق من اتصالك وحاول مرة أخرى.",
    ),
    "source_failed_quran": ("Could not load Quran results", "تعذّر تحميل نتائج القرآن"),
    "source_failed_hadith": ("Could not load Hadith results", "تعذّر تحميل نتائج الحديث"),
    "all_failed": ("Could not load results", "تعذّر تحميل النتائج"),
}


def translate(key: str, locale: Locale) -> str:
    english, arabic = _MESSAGES[key]
    return arabic if locale is Locale.AR else english


class ErrorNotice(BaseModel):
    """User-facing description of one failed source."""

    source: str | None = None
    title: str | None = None
    code: int | None = None
    message: str
    hint: str


def describe_source_error(
    error: BaseException,
    locale: Locale = Locale.EN,
    source: str | None = None,
) -> ErrorNotice:
    """Describe a failure reason for display.

    Args:
        error: The failure reason (usually a GatewayError)
        locale: Display language
        source: "quran" or "hadith" when the notice belongs to one source

    Returns:
        ErrorNotice with an HTTP-ish code (None for network failures)
    """
    title = translate(f"source_failed_{source}", locale) if source else None

    if not isinstance(error, GatewayError):
        return ErrorNotice(
            source=source,
            title=title,
            message=translate("connection", locale),
            hint=translate("connection_hint", locale),
        )

    code = error.status
    if code == 0:
        hint = translate("unreachable_hint", locale)
        if locale is Locale.EN:
            hint = f"{hint} - {error.path}"
        return ErrorNotice(
            source=source,
            title=title,
            message=translate("unreachable", locale),
            hint=hint,
        )
    if code == 404:
        key, hint = "not_found", error.path
    elif code == 429:
        key, hint = "rate_limited", translate("rate_limited_hint", locale)
    elif code == 503:
        key, hint = "unavailable", error.path
    elif code >= 500:
        key, hint = "server_error", error.path
    else:
        key, hint = "unexpected", error.path

    return ErrorNotice(
        source=source,
        title=title,
        code=code,
        message=translate(key, locale),
        hint=hint,
    )


def _request_locale(request: Request) -> Locale:
    try:
        return Locale(request.query_params.get("lang", Locale.EN.value))
    except ValueError:
        return Locale.EN


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "resource": exc.resource},
    )


async def dual_source_failure_handler(
    request: Request, exc: DualSourceFailure
) -> JSONResponse:
    locale = _request_locale(request)
    notices = [
        describe_source_error(exc.quran_reason, locale, source="quran"),
        describe_source_error(exc.hadith_reason, locale, source="hadith"),
    ]
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "detail": translate("all_failed", locale),
            "notices": [n.model_dump() for n in notices],
        },
    )


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.warning("upstream_failure", path=exc.path, status=exc.status)
    notice = describe_source_error(exc, _request_locale(request))
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": notice.message, "notices": [notice.model_dump()]},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to an application."""
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(DualSourceFailure, dual_source_failure_handler)
    app.add_exception_handler(GatewayError, gateway_error_handler)
