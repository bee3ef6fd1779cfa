"""Page window computation."""

import math

from finrecon.domain import errors
from finrecon.domain.entities import PageWindow

DEFAULT_PAGE_SIZE = 10


def compute_page_window(page: int, page_size: int, total_count: int) -> PageWindow:
    """Compute the page window for a list of total_count items.

    There is always at least one page. Requested pages outside
    [1, total_pages] are clamped into range; the caller slices its own items
    using PageWindow.offset and page_size.

    Raises:
        ValidationError: If page is not an integer
        ValidationError: If page_size is not positive or total_count is negative
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise errors.ValidationError(errors.non_positive_page_size(page_size))
    if total_count < 0:
        raise errors.ValidationError(errors.negative_total_count(total_count))

    total_pages = max(1, math.ceil(total_count / page_size))
    if isinstance(page, bool):
        raise errors.ValidationError(errors.invalid_page(page))
    try:
        requested = int(page)
    except (TypeError, ValueError):
        raise errors.ValidationError(errors.invalid_page(page))
    current_page = min(max(requested, 1), total_pages)
    return PageWindow(
        current_page=current_page,
        total_pages=total_pages,
        total_count=total_count,
        page_size=page_size,
    )
