"""
Error Notice Tests

describe_source_error() maps failure reasons onto bilingual notices.
"""

import pytest

from src.api.errors import describe_source_error, translate
from src.api.schemas import Locale
from src.core.exceptions import GatewayError, SourceTimeoutError


class TestDescribeSourceError:
    """Tests for describe_source_error()."""

    def test_network_failure_has_no_code(self) -> None:
        notice = describe_source_error(GatewayError(0, "/api/search"))

        assert notice.code is None
        assert notice.message == "Could not connect to server"
        assert notice.hint == "Network error - /api/search"

    def test_network_failure_arabic_hint_omits_path(self) -> None:
        notice = describe_source_error(GatewayError(0, "/api/search"), Locale.AR)

        assert notice.message == "تعذّر الاتصال بالخادم"
        assert "/api/search" not in notice.hint

    def test_timeout_reads_as_network_failure(self) -> None:
        notice = describe_source_error(SourceTimeoutError("quran", 15.0))

        assert notice.code is None
        assert notice.message == "Could not connect to server"

    @pytest.mark.parametrize(
        "status,message",
        [
            (404, "Content not found"),
            (429, "Too many requests"),
            (503, "Service temporarily unavailable"),
            (500, "Server error"),
            (502, "Server error"),
            (401, "Unexpected error"),
        ],
    )
    def test_status_messages(self, status: int, message: str) -> None:
        notice = describe_source_error(GatewayError(status, "/hadiths"))

        assert notice.code == status
        assert notice.message == message

    def test_rate_limit_hint(self) -> None:
        notice = describe_source_error(GatewayError(429, "/hadiths"))

        assert notice.hint == "Wait a moment and try again."

    def test_non_gateway_error(self) -> None:
        notice = describe_source_error(RuntimeError("boom"))

        assert notice.code is None
        assert notice.message == "Connection error"

    def test_source_title(self) -> None:
        notice = describe_source_error(GatewayError(500, "/x"), Locale.AR, source="hadith")

        assert notice.source == "hadith"
        assert notice.title == translate("source_failed_hadith", Locale.AR)
        assert notice.message == "خطأ في الخادم"
