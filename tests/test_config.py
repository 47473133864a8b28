"""
Tests for settings validation helpers
"""
from unittest.mock import patch

import httpx
import pytest

from github_agent.config import (
    get_current_model_info,
    settings,
    validate_github_token,
    validate_llm_provider,
    validate_neo4j_connection,
)


class TestValidation:
    """Test non-fatal startup checks"""

    @pytest.mark.unit
    def test_missing_github_token(self):
        with patch.object(settings, "github_token", None):
            assert validate_github_token() is False

    @pytest.mark.unit
    def test_github_token_accepted(self):
        with patch.object(settings, "github_token", "ghp_test"), \
                patch("github_agent.config.validation.httpx.get", return_value=httpx.Response(200)) as get:
            assert validate_github_token() is True
        assert get.call_args[0][0].endswith("/user")

    @pytest.mark.unit
    def test_llm_key_required(self):
        with patch.object(settings, "llm_provider", "openai"), patch.object(settings, "openai_api_key", None):
            assert validate_llm_provider() is False
        with patch.object(settings, "llm_provider", "openai"), patch.object(settings, "openai_api_key", "sk-test"):
            assert validate_llm_provider() is True

    @pytest.mark.unit
    def test_disabled_graph_store(self):
        with patch.object(settings, "enable_graph_store", False):
            assert validate_neo4j_connection() is False

    @pytest.mark.unit
    def test_model_info(self):
        with patch.object(settings, "llm_provider", "gemini"):
            info = get_current_model_info()
        assert info == {"llm_provider": "gemini", "llm_model": settings.gemini_model}
