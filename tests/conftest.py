"""Shared pytest configuration for trot tests."""

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """uvicorn only runs on asyncio, so every async test does too."""
    return "asyncio"
