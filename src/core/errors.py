"""Error taxonomy for the move service.

Input problems surface to the caller; remote problems are recovered locally by
the fallback heuristic and never leave the resolver.
"""

from __future__ import annotations


class MoveServiceError(Exception):
    """Base class for every error raised by this package."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(MoveServiceError):
    """Malformed board, invalid cell, invalid AI symbol or a full board."""

    status_code = 400


class NoMovesAvailableError(MoveServiceError):
    """The board has no empty cell at resolution time."""

    status_code = 400

    def __init__(self, message: str = "No valid moves available") -> None:
        super().__init__(message)


class RemoteUnavailableError(MoveServiceError):
    """The text-generation call failed, errored or timed out."""

    status_code = 502


class UnparsableResponseError(MoveServiceError):
    """The model text holds no digit that maps to an empty cell."""

    status_code = 502

    def __init__(self, raw: str) -> None:
        super().__init__(f"No playable digit in model response: {raw!r}")
        self.raw = raw


class ConfigurationError(MoveServiceError):
    """Startup configuration is unusable (missing key, unknown provider)."""
