"""Pagination helpers for offset/limit list endpoints."""

from __future__ import annotations


def offset_for(page: int, page_size: int) -> int:
    """Server offset of the first item on a 1-based page."""
    return (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    """
    Number of pages needed to show ``total`` items.

    An empty result still has one (empty) page so page 1 is always valid.
    """
    if total <= 0:
        return 1
    return -(-total // page_size)


def clamp_page(page: int, total: int, page_size: int) -> int:
    """Clamp a 1-based page number into ``[1, total_pages]``."""
    return max(1, min(page, total_pages(total, page_size)))
