"""Sort options for the papers list: human labels to server sort keys."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

DEFAULT_SORT_LABEL = "Default"
DEFAULT_SORT_KEY = "createdAt"  # natural/creation order

# Ordered as shown in the "Sort by" dropdown. A leading "-" means descending.
SORT_OPTIONS: tuple[tuple[str, str], ...] = (
    (DEFAULT_SORT_LABEL, DEFAULT_SORT_KEY),
    ("Year (Newest)", "-year"),
    ("Year (Oldest)", "year"),
    ("Class (Asc)", "class"),
    ("Class (Desc)", "-class"),
    ("Subject (A-Z)", "subject"),
    ("Subject (Z-A)", "-subject"),
)


class SortRegistry:
    """
    Static lookup table from sort label to canonical sort key.

    Resolution is permissive: anything unrecognized maps to the default key,
    since a wrong sort only changes ordering, never which papers are listed.
    """

    def __init__(
        self,
        options: tuple[tuple[str, str], ...] = SORT_OPTIONS,
        default_key: str = DEFAULT_SORT_KEY,
    ) -> None:
        self._by_label: dict[str, str] = dict(options)
        self._by_key: dict[str, str] = {key: label for label, key in options}
        if default_key not in self._by_key:
            raise ValueError(f"Default sort key '{default_key}' is not a registered key")
        self._options = options
        self._default_key = default_key

    @property
    def default_key(self) -> str:
        return self._default_key

    def resolve(self, label_or_key: str | None) -> str:
        """
        Return the canonical sort key for a label (or an already-canonical key).

        Args:
            label_or_key: Dropdown label such as "Year (Newest)", or a key such as "-year".

        Returns:
            Canonical server sort key; the default key when unrecognized.
        """
        if label_or_key is None:
            return self._default_key
        if label_or_key in self._by_label:
            return self._by_label[label_or_key]
        if label_or_key in self._by_key:
            return label_or_key
        logger.debug("Unknown sort option %r, using default %r", label_or_key, self._default_key)
        return self._default_key

    def is_key(self, key: str) -> bool:
        return key in self._by_key

    def label_for(self, key: str) -> str:
        """Dropdown label for a key; unknown keys show the default label."""
        return self._by_key.get(key, self._by_key[self._default_key])

    def labels(self) -> list[str]:
        return [label for label, _ in self._options]

    def keys(self) -> list[str]:
        return [key for _, key in self._options]


# Shared registry instance
sort_registry = SortRegistry()
