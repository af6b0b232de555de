"""Sync presentation layer - HTTP routes and response models."""

from sync.presentation.errors import register_error_handlers
from sync.presentation.routes import router

__all__ = ["register_error_handlers", "router"]
