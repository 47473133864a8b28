"""
Validation functions for configuration settings.

This module checks that the configured GitHub token, LLM provider and
Neo4j database are usable. Failures are reported, never raised.
"""

import httpx
from loguru import logger

from github_agent.config.settings import settings


def validate_github_token() -> bool:
    """Validate the GitHub token against the /user endpoint"""
    if not settings.github_token:
        logger.warning("GitHub token not provided, requests are limited to 60/hour")
        return False
    try:
        response = httpx.get(
            f"{settings.github_api_url}/user",
            headers={"Authorization": f"Bearer {settings.github_token}"},
            timeout=10,
        )
        return response.status_code == 200
    except Exception as e:
        logger.warning(f"GitHub token validation failed: {e}")
        return False


def validate_llm_provider() -> bool:
    """Validate that the configured LLM provider has its credentials"""
    provider = settings.llm_provider
    if provider == "ollama":
        try:
            response = httpx.get(f"{settings.ollama_base_url}/api/tags", timeout=10)
            return response.status_code == 200
        except Exception as e:
            logger.warning(f"Ollama connection failed: {e}")
            return False

    key = {
        "openai": settings.openai_api_key,
        "gemini": settings.google_api_key,
        "openrouter": settings.openrouter_api_key,
    }.get(provider)
    if not key:
        logger.warning(f"API key for LLM provider '{provider}' not provided")
        return False
    return True


def validate_neo4j_connection() -> bool:
    """Validate Neo4j connection parameters"""
    if not settings.enable_graph_store:
        return False
    try:
        from neo4j import GraphDatabase
        driver = GraphDatabase.driver(
            settings.neo4j_uri,
            auth=(settings.neo4j_username, settings.neo4j_password)
        )
        with driver.session(database=settings.neo4j_database) as session:
            session.run("RETURN 1")
        driver.close()
        return True
    except Exception as e:
        logger.warning(f"Neo4j connection failed: {e}")
        return False


def get_current_model_info() -> dict:
    """Get information about the currently configured LLM"""
    return {
        "llm_provider": settings.llm_provider,
        "llm_model": {
            "ollama": settings.ollama_model,
            "openai": settings.openai_model,
            "gemini": settings.gemini_model,
            "openrouter": settings.openrouter_model
        }.get(settings.llm_provider),
    }


def validate_all_settings() -> dict:
    """Run every check and return a report keyed by service"""
    return {
        "github": validate_github_token(),
        "llm": validate_llm_provider(),
        "neo4j": validate_neo4j_connection(),
    }
