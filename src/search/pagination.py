"""
Pagination Builder

Pure functions mapping (current page, total pages) to a compact token list
and, with a caller-supplied href builder, to navigable links.

Token layout for more than 7 pages:
    1 … (current-1) current (current+1) … total
with each ellipsis present only when it hides at least one page. At most 7
tokens are emitted whatever the total.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

ELLIPSIS: Final[str] = "…"
MAX_UNCOMPRESSED: Final[int] = 7

PageToken = int | str


def total_pages_for(total_count: int, page_size: int) -> int:
    """Number of pages for a result count; never less than 1."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, -(-total_count // page_size))


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a requested page into [1, total_pages]."""
    return min(max(1, page), total_pages)


def page_tokens(current: int, total: int) -> list[PageToken]:
    """Compute the page tokens to render.

    Args:
        current: Current page (clamped into [1, total])
        total: Total number of pages

    Returns:
        Page numbers in increasing order, with ELLIPSIS markers for gaps

    Raises:
        ValueError: When total is less than 1
    """
    if total < 1:
        raise ValueError(f"total must be at least 1, got {total}")

    if total <= MAX_UNCOMPRESSED:
        return list(range(1, total + 1))

    current = clamp_page(current, total)
    tokens: list[PageToken] = [1]

    if current > 3:
        tokens.append(ELLIPSIS)

    start = max(2, current - 1)
    end = min(total - 1, current + 1)
    tokens.extend(range(start, end + 1))

    if current < total - 2:
        tokens.append(ELLIPSIS)

    tokens.append(total)
    return tokens


@dataclass(frozen=True, slots=True)
class PageLink:
    """A rendered pagination token; ellipsis tokens carry no page or href."""

    label: str
    page: int | None = None
    href: str | None = None
    is_current: bool = False

    @property
    def is_ellipsis(self) -> bool:
        return self.page is None


@dataclass(frozen=True, slots=True)
class PageLinks:
    current: int
    total: int
    links: list[PageLink]
    previous_href: str | None = None
    next_href: str | None = None

    @property
    def visible(self) -> bool:
        """Pagination is only rendered when there is more than one page."""
        return self.total > 1


def build_page_links(
    current: int,
    total: int,
    build_href: Callable[[int], str],
) -> PageLinks:
    """Decorate page tokens with hrefs from the caller's link builder.

    Args:
        current: Current page
        total: Total number of pages
        build_href: Maps a page number to a link target

    Returns:
        PageLinks with one entry per token plus previous/next hrefs
    """
    tokens = page_tokens(current, total)
    current = clamp_page(current, total)

    links: list[PageLink] = []
    for token in tokens:
        if isinstance(token, int):
            links.append(
                PageLink(
                    label=str(token),
                    page=token,
                    href=build_href(token),
                    is_current=token == current,
                )
            )
        else:
            links.append(PageLink(label=ELLIPSIS))

    return PageLinks(
        current=current,
        total=total,
        links=links,
        previous_href=build_href(current - 1) if current > 1 else None,
        next_href=build_href(current + 1) if current < total else None,
    )
