"""
Configuration module for GitHub Agent.

This module exports all configuration-related objects and functions.
"""

from github_agent.config.settings import Settings, settings
from github_agent.config.validation import (
    validate_github_token,
    validate_llm_provider,
    validate_neo4j_connection,
    validate_all_settings,
    get_current_model_info,
)

__all__ = [
    # Settings
    "Settings",
    "settings",
    # Validation functions
    "validate_github_token",
    "validate_llm_provider",
    "validate_neo4j_connection",
    "validate_all_settings",
    "get_current_model_info",
]
