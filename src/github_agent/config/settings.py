"""
Configuration settings for GitHub Agent.

This module defines all application settings using Pydantic Settings.
Settings can be configured via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, Literal


class Settings(BaseSettings):
    # Application Settings
    app_name: str = "GitHub Agent"
    app_version: str = "0.3.0"
    debug: bool = Field(default=False, description="Enable debug mode", alias="DEBUG")

    # Server Settings
    host: str = Field(default="0.0.0.0", description="Host for the API server", alias="HOST")
    port: int = Field(default=8080, description="Port for the API server", alias="PORT")
    api_prefix: str = Field(default="/api", description="Prefix for all REST routes", alias="API_PREFIX")

    # GitHub API
    github_token: Optional[str] = Field(default=None, description="GitHub personal access token", alias="GITHUB_TOKEN")
    github_api_url: str = Field(default="https://api.github.com", description="GitHub REST API base URL", alias="GITHUB_API_URL")
    github_timeout: int = Field(default=60, description="GitHub request timeout in seconds", alias="GITHUB_TIMEOUT")

    # LLM Provider Configuration
    llm_provider: Literal["ollama", "openai", "gemini", "openrouter"] = Field(
        default="ollama",
        description="LLM provider to use",
        alias="LLM_PROVIDER"
    )

    # Ollama LLM Service
    ollama_base_url: str = Field(default="http://localhost:11434", description="Ollama service URL", alias="OLLAMA_HOST")
    ollama_model: str = Field(default="llama3", description="Ollama model name", alias="OLLAMA_MODEL")

    # OpenAI Configuration
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key", alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI model name", alias="OPENAI_MODEL")
    openai_base_url: Optional[str] = Field(default=None, description="OpenAI API base URL", alias="OPENAI_BASE_URL")

    # Google Gemini Configuration
    google_api_key: Optional[str] = Field(default=None, description="Google API key", alias="GOOGLE_API_KEY")
    gemini_model: str = Field(default="models/gemini-1.5-pro", description="Gemini model name", alias="GEMINI_MODEL")

    # OpenRouter Configuration
    openrouter_api_key: Optional[str] = Field(default=None, description="OpenRouter API key", alias="OPENROUTER_API_KEY")
    openrouter_model: Optional[str] = Field(default="openai/gpt-4o-mini", description="OpenRouter model", alias="OPENROUTER_MODEL")

    # Model Parameters
    temperature: float = Field(default=0.2, description="LLM temperature", alias="LLM_TEMPERATURE")
    max_tokens: int = Field(default=4096, description="Maximum tokens for LLM response", alias="LLM_MAX_TOKENS")
    llm_timeout: int = Field(default=180, description="LLM request timeout in seconds", alias="LLM_TIMEOUT")

    # Neo4j Graph Database
    enable_graph_store: bool = Field(default=True, description="Persist repository graphs in Neo4j", alias="ENABLE_GRAPH_STORE")
    neo4j_uri: str = Field(default="bolt://localhost:7687", description="Neo4j connection URI", alias="NEO4J_URI")
    neo4j_username: str = Field(default="neo4j", description="Neo4j username", alias="NEO4J_USER")
    neo4j_password: str = Field(default="password", description="Neo4j password", alias="NEO4J_PASSWORD")
    neo4j_database: str = Field(default="neo4j", description="Neo4j database name", alias="NEO4J_DATABASE")

    # Architecture diagram ranking
    diagram_directory_boost: int = Field(default=10, description="Importance bonus for directory nodes")
    diagram_entry_point_boost: int = Field(default=5, description="Importance bonus for canonical entry-point files")
    diagram_max_nodes_medium: int = Field(default=100, description="Node cap for medium detail diagrams")
    diagram_max_nodes_low: int = Field(default=30, description="Node cap for low detail diagrams")

    # Prompt and sampling limits
    max_prompt_file_chars: int = Field(default=8000, description="Characters of a single file embedded in a prompt")
    max_sample_files: int = Field(default=5, description="Files sampled for walkthroughs and best practices")
    max_qa_files: int = Field(default=8, description="Relevant files collected for codebase Q&A")
    max_import_scan_files: int = Field(default=200, description="Source files scanned for imports when building the graph")
    max_pr_prompt_files: int = Field(default=10, description="Changed files detailed in PR summary prompts")
    max_component_descriptions: int = Field(default=10, description="Diagram components described by the LLM")

    # API Settings
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")
    gzip_minimum_size: int = Field(default=1000, description="Smallest response body in bytes that gets gzip compressed")

    # logging
    log_file: Optional[str] = Field(default=None, description="Log file path", alias="LOG_FILE")
    log_level: str = Field(default="INFO", description="Log level", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields to avoid validation errors


# Global settings instance
settings = Settings()
