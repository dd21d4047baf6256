"""Tests for facet dimensions and single-select facet sets."""

from paper_catalog.catalog.facets import DIMENSION_ORDER, FacetDimension, FacetSet, empty_facets


class TestFacetSet:
    """Test the single-select toggle policy."""

    def test_toggle_selects_value(self):
        facet = FacetSet(FacetDimension.CLASS).toggle("10")

        assert facet.values == ("10",)
        assert facet.contains("10")
        assert not facet.is_all()

    def test_toggle_other_value_replaces_selection(self):
        facet = FacetSet(FacetDimension.CLASS).toggle("10").toggle("12")

        assert facet.values == ("12",)
        assert not facet.contains("10")

    def test_toggle_selected_value_clears(self):
        facet = FacetSet(FacetDimension.SUBJECT, ("Physics",)).toggle("Physics")

        assert facet == FacetSet(FacetDimension.SUBJECT)
        assert facet.is_all()

    def test_toggle_is_pure(self):
        original = FacetSet(FacetDimension.BOARD)
        original.toggle("CBSE")

        assert original.values == ()

    def test_toggle_twice_returns_to_empty(self):
        empty = FacetSet(FacetDimension.YEAR)

        assert empty.toggle("2023").toggle("2023") == empty

    def test_clear_keeps_dimension(self):
        facet = FacetSet(FacetDimension.EXAM_TYPE, ("Board",)).clear()

        assert facet.dimension is FacetDimension.EXAM_TYPE
        assert facet.values == ()

    def test_all_option_checked_only_when_empty(self):
        """The synthetic "All" checkbox mirrors an empty selection."""
        facet = FacetSet(FacetDimension.CLASS)
        assert facet.is_all()
        assert not facet.contains("All")

        assert not facet.toggle("10").is_all()


class TestFacetDimensions:
    """Test dimension ordering and wire names."""

    def test_wire_names(self):
        assert [d.value for d in DIMENSION_ORDER] == ["class", "subject", "board", "year", "examType"]

    def test_empty_facets_covers_every_dimension_in_order(self):
        facets = empty_facets()

        assert tuple(f.dimension for f in facets) == DIMENSION_ORDER
        assert all(f.is_all() for f in facets)
