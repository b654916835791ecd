"""Unit tests for the meaning-pivot pipeline.

This package contains test modules for all components of the pipeline.
Tests use pytest with asyncio support and replace network calls with dummy backends via monkeypatch.
"""
