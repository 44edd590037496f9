"""Embedding provider — single place to swap providers.

Supports two providers behind LangChain's ``Embeddings`` interface:

1. **huggingface** (default) — a local sentence-transformer model.
2. **openai** — the OpenAI embeddings API; set ``OPENAI_API_KEY``.

The returned object is built once at process start and shared by every
indexing task, so it must tolerate concurrent calls.
"""

from __future__ import annotations

import logging

from langchain_core.embeddings import Embeddings

from doc_indexer.config import settings

logger = logging.getLogger(__name__)


def get_embedding_function(
    provider: str | None = None,
    model: str | None = None,
) -> Embeddings:
    """Return the configured embedding function.

    Parameters
    ----------
    provider:
        ``"huggingface"`` or ``"openai"``; defaults to
        ``settings.embedding_provider``.
    model:
        Model identifier; defaults to ``settings.embedding_model``.
    """
    provider = provider or settings.embedding_provider
    model = model or settings.embedding_model

    if provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        logger.info("Using HuggingFace embeddings: %s", model)
        return HuggingFaceEmbeddings(model_name=model)

    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        logger.info("Using OpenAI embeddings: %s", model)
        return OpenAIEmbeddings(model=model, api_key=settings.openai_api_key or None)

    raise ValueError(f"Unsupported embedding provider: {provider!r}")
