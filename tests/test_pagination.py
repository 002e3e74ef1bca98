import pytest

from eshop.utils.pagination import normalize_paging, page_offset


@pytest.mark.parametrize(
    "page, page_size, expected",
    [
        (1, 10, (1, 10)),
        (3, 25, (3, 25)),
        (0, 10, (1, 10)),
        (-4, 10, (1, 10)),
        (2, 0, (2, 10)),
        (2, 101, (2, 10)),
        (2, 100, (2, 100)),
        (2, 1, (2, 1)),
    ],
)
def test_normalize_paging(page, page_size, expected):
    assert normalize_paging(page, page_size) == expected


def test_page_offset():
    assert page_offset(1, 10) == 0
    assert page_offset(3, 25) == 50
