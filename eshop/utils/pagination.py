from typing import Tuple

from eshop.domain.services.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def normalize_paging(page: int, page_size: int) -> Tuple[int, int]:
    """
    Clamp paging input: page below 1 becomes 1, a page size outside
    [1, MAX_PAGE_SIZE] falls back to DEFAULT_PAGE_SIZE (it is not capped).
    """
    p = page if page and page >= 1 else 1
    ps = page_size if page_size and 1 <= page_size <= MAX_PAGE_SIZE else DEFAULT_PAGE_SIZE
    return p, ps


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size
