"""Custom exception hierarchy for pyebula."""

from __future__ import annotations


class EbulaError(Exception):
    """Base exception for all pyebula errors."""


class EbulaConfigError(EbulaError):
    """Invalid or missing configuration."""


class EbulaNotFoundError(EbulaError):
    """The route store has no record for the requested id."""

    def __init__(
        self,
        message: str,
        *,
        kind: str = "",
        ident: int | None = None,
    ) -> None:
        self.kind = kind
        self.ident = ident
        super().__init__(message)


class EbulaStateError(EbulaError):
    """Operation is not valid in the controller's current phase.

    Raised for programmer errors such as calling ``set_time`` before
    ``load`` or loading a session twice.
    """


class EbulaSessionDisposedError(EbulaStateError):
    """The tracking session was disposed; no further commands are accepted."""
