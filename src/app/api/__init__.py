"""HTTP error primitives shared by relay routes."""

from .errors import ApiError, api_error_from_relay

__all__ = ["ApiError", "api_error_from_relay"]
