"""Application layer helpers for the highlighting service."""

from .app import (
    HighlightingConfig,
    HighlightingContainer,
    build_highlighting_container,
    create_app,
    include_routes,
    run_api,
)

__all__ = [
    "HighlightingConfig",
    "HighlightingContainer",
    "build_highlighting_container",
    "create_app",
    "include_routes",
    "run_api",
]
