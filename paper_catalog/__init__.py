"""Paper catalog query controller: facets, search, sort and pagination for the papers list."""

__version__ = "0.1.0"
