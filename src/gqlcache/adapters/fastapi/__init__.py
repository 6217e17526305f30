"""FastAPI adapter for gqlcache."""

from gqlcache.adapters.fastapi.app import build_service, create_app

__all__ = [
    "create_app",
    "build_service",
]
