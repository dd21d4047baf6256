"""Tests for pagination helpers."""

import pytest

from paper_catalog.common.pagination import clamp_page, offset_for, total_pages


class TestPagination:
    def test_offset_for(self):
        assert offset_for(1, 8) == 0
        assert offset_for(3, 8) == 16

    @pytest.mark.parametrize(
        "total,page_size,expected",
        [(0, 8, 1), (1, 8, 1), (8, 8, 1), (9, 8, 2), (20, 8, 3), (100, 25, 4)],
    )
    def test_total_pages(self, total, page_size, expected):
        assert total_pages(total, page_size) == expected

    def test_clamp_page(self):
        assert clamp_page(5, 10, 8) == 2
        assert clamp_page(2, 10, 8) == 2
        assert clamp_page(3, 0, 8) == 1
