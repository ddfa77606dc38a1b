"""Unit tests for the pagination calculator."""

import pytest

from shared.clients.tracker.models.Pagination import Pagination, next_page


class TestNextPage:

    @pytest.mark.parametrize(
        "offset, limit, total, expected",
        [
            (0, 25, 110, 2),
            (25, 25, 110, 3),
            (50, 25, 110, 4),
            (75, 25, 110, 5),
            (0, 25, 53, 2),
            (25, 25, 53, 3),
            (0, 25, 25, 2),
            (0, 100, 300, 2),
        ],
    )
    def test_next_page_index(self, offset, limit, total, expected):
        assert next_page(offset, limit, total) == expected

    @pytest.mark.parametrize(
        "offset, limit, total",
        [
            (100, 25, 110),
            (50, 25, 53),
            (0, 25, 10),
            (0, 25, 0),
            (110, 25, 110),
        ],
    )
    def test_last_page_is_terminal(self, offset, limit, total):
        assert next_page(offset, limit, total) is None

    def test_formula_holds_whenever_a_full_page_remains(self):
        for limit in range(1, 30):
            for total in range(0, 120, 7):
                for offset in range(0, total + 1):
                    result = next_page(offset, limit, total)
                    if total - offset >= limit:
                        assert result == (offset + limit) // limit + 1
                    else:
                        assert result is None

    @pytest.mark.parametrize("offset, total", [(0, 0), (0, 10), (5, 110), (110, 110)])
    def test_zero_limit_is_terminal(self, offset, total):
        assert next_page(offset, 0, total) is None

    def test_uses_limit_of_current_page(self):
        assert next_page(40, 20, 100) == 4
        assert next_page(40, 10, 100) == 6


class TestPaginationModel:

    def test_reads_redmine_keys(self):
        pagination = Pagination.model_validate({"offset": 25, "limit": 25, "total_count": 110})
        assert (pagination.offset, pagination.limit, pagination.total) == (25, 25, 110)
        assert pagination.next_page() == 3

    def test_accepts_field_names(self):
        pagination = Pagination(offset=100, limit=25, total=110)
        assert pagination.next_page() is None

    def test_rejects_negative_values(self):
        with pytest.raises(ValueError):
            Pagination(offset=-1, limit=25, total=110)
