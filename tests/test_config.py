"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from paper_catalog.core.config import Settings


class TestSettings:
    """Test Settings defaults and validation."""

    def test_defaults(self):
        cfg = Settings(_env_file=None, API_TOKEN=None, ENV="dev")

        assert cfg.PAGE_SIZE == 8
        assert cfg.PAPERS_LIST_PATH == "papers/admin/list"
        assert cfg.PAPERS_METADATA_PATH == "papers/metadata"
        assert cfg.CANCEL_SUPERSEDED_REQUESTS is True
        assert cfg.KEEP_RESULTS_ON_ERROR is True

    def test_base_url_trailing_slash_stripped(self):
        cfg = Settings(_env_file=None, API_BASE_URL="https://api.example.com/api/")

        assert cfg.API_BASE_URL == "https://api.example.com/api"

    def test_paths_normalized(self):
        cfg = Settings(_env_file=None, PAPERS_LIST_PATH="/papers/admin/list/")

        assert cfg.PAPERS_LIST_PATH == "papers/admin/list"

    @pytest.mark.parametrize("page_size", [0, -3, 101])
    def test_page_size_bounds(self, page_size):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, PAGE_SIZE=page_size)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, REQUEST_TIMEOUT_SECONDS=0)

    def test_prod_requires_token(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ENV="prod", API_TOKEN=None)

        cfg = Settings(_env_file=None, ENV="prod", API_TOKEN="secret")
        assert cfg.API_TOKEN == "secret"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PAGE_SIZE", "12")
        monkeypatch.setenv("KEEP_RESULTS_ON_ERROR", "false")

        cfg = Settings(_env_file=None)

        assert cfg.PAGE_SIZE == 12
        assert cfg.KEEP_RESULTS_ON_ERROR is False
