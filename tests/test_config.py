"""Tests for configuration."""

import pytest
from pydantic import ValidationError

from code_pulse.config.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        settings = Settings(_env_file=None)

        assert settings.github_token is None
        assert settings.github_api_base == "https://api.github.com"
        assert settings.user_agent == "CodePulse-App"
        assert settings.page_size == 100
        assert settings.detail_failure_policy == "fail_fast"

    def test_github_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_from_env")
        assert Settings(_env_file=None).github_token == "ghp_from_env"

    def test_prefixed_environment_variables(self, monkeypatch):
        monkeypatch.setenv("CODE_PULSE_PAGE_SIZE", "50")
        monkeypatch.setenv("CODE_PULSE_DETAIL_FAILURE_POLICY", "skip")

        settings = Settings(_env_file=None)

        assert settings.page_size == 50
        assert settings.detail_failure_policy == "skip"

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_page_size_bounds(self, page_size):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, page_size=page_size)

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, detail_failure_policy="retry")
