"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Segmentation
    host_prefix: str = Field(
        default="https://shopify.dev",
        description="Literal prefix stripped from page URLs to build the stored source URL",
    )
    title_selector: str = ".article-title"
    content_selector: str = ".article--docs"
    section_selector: str = ".feedback-section"
    section_title_selector: str = ".heading-wrapper > h2"
    section_anchor_selector: str = ".heading-wrapper > .article-anchor-link"
    floating_ui_selector: str = "#FeedbackFloatingAnchor"
    code_placeholder_selector: str = "script[type='text/plain']"
    trim_section_markdown: bool = Field(
        default=False,
        description="Strip surrounding whitespace from per-section Markdown as well",
    )

    # Fetch
    request_timeout: int = 30
    user_agent: str = "doc-indexer/0.1"

    # Embedding
    embedding_provider: str = Field(default="huggingface", description="'huggingface' or 'openai'")
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    openai_api_key: str = Field(default="", description="OpenAI API key (openai provider only)")
    embedding_dimension: int = Field(
        default=384,
        description="Vector width of the collection; must match the embedding model",
    )

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "doc-index"
    distance_metric: str = Field(default="l2", description="Chroma hnsw:space (l2 | cosine | ip)")

    # Logging
    log_level: str = "INFO"

    # Serving
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
