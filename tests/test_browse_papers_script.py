"""Tests for the browse_papers command-line tool."""

import importlib.util
from pathlib import Path

import httpx
import pytest

from paper_catalog.catalog.facets import FacetDimension
from tests.helpers.catalog import make_paper

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "browse_papers.py"


@pytest.fixture(scope="module")
def browse():
    spec = importlib.util.spec_from_file_location("browse_papers", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestStateFromArgs:
    def test_defaults_give_initial_state(self, browse):
        state = browse.state_from_args(browse.parse_args([]))

        assert state.active_filter_count == 0
        assert state.search_term == ""
        assert state.sort_key == "createdAt"
        assert state.page == 1

    def test_flags_map_to_facets(self, browse):
        args = browse.parse_args(
            ["--class", "10", "--exam-type", "Board", "--search", "  algebra ", "--sort", "Year (Newest)", "--page", "3"]
        )

        state = browse.state_from_args(args)

        assert state.facet(FacetDimension.CLASS).values == ("10",)
        assert state.facet(FacetDimension.EXAM_TYPE).values == ("Board",)
        assert state.search_term == "algebra"
        assert state.sort_key == "-year"
        assert state.page == 3


    def test_page_below_one_is_a_usage_error(self, browse, capsys):
        with pytest.raises(SystemExit) as exc_info:
            browse.parse_args(["--page", "0"])

        assert exc_info.value.code == 2
        assert "must be >= 1" in capsys.readouterr().err


class TestRun:
    @pytest.mark.asyncio
    async def test_run_prints_results(self, browse, monkeypatch, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/papers/metadata"):
                return httpx.Response(200, json={"isSuccess": True, "data": {"classes": [{"name": "10", "count": 1}]}})
            return httpx.Response(
                200,
                json={"isSuccess": True, "data": {"items": [make_paper(1)], "pagination": {"total": 1}}},
            )

        original_client = browse.PapersClient

        def client_factory(**kwargs):
            return original_client(transport=httpx.MockTransport(handler), **kwargs)

        monkeypatch.setattr(browse, "PapersClient", client_factory)

        code = await browse.run(browse.parse_args(["--base-url", "http://testserver/api"]))

        out = capsys.readouterr().out
        assert code == 0
        assert "Request: GET http://testserver/api/papers/admin/list?limit=8&offset=0&sortBy=createdAt" in out
        assert "Sort: Default" in out
        assert "Showing 1 papers, page 1 of 1" in out
        assert "Sample Paper 1" in out

    @pytest.mark.asyncio
    async def test_run_reports_failure(self, browse, monkeypatch, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"isSuccess": False, "message": "boom"})

        original_client = browse.PapersClient
        monkeypatch.setattr(
            browse,
            "PapersClient",
            lambda **kwargs: original_client(transport=httpx.MockTransport(handler), **kwargs),
        )

        code = await browse.run(browse.parse_args(["--base-url", "http://testserver/api", "--no-metadata"]))

        assert code == 1
        assert "Error" in capsys.readouterr().out
