"""
Serving — FastAPI application exposing extraction and indexing over HTTP.
"""
