"""Configuration DTOs."""

from .handler_options import HandlerOptions

__all__ = ["HandlerOptions"]
