"""Domain errors surfaced to the API layer as user-facing notifications."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import status


class VaultError(Exception):
    """Base class for errors that carry a notification title and HTTP status."""

    error = "vault_error"
    title = "An Error Occurred"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        title: Optional[str] = None,
        detail: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if title:
            self.title = title
        self.detail = detail or {}


class ConfigurationError(VaultError):
    """Raised when the Supabase client cannot be built from configuration."""

    error = "configuration_error"
    title = "Configuration Error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Please configure Supabase in settings first.", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class RemoteRequestError(VaultError):
    """Raised when a request to the backend fails (network or PostgREST error)."""

    error = "remote_request_failed"
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.code = code


class EntryNotFoundError(VaultError):
    """Raised when an entry id does not resolve to a visible row."""

    error = "not_found"
    title = "Entry Not Found"
    status_code = status.HTTP_404_NOT_FOUND


class ConfirmationRequiredError(VaultError):
    """Raised when a destructive action is attempted without confirmation."""

    error = "confirmation_required"
    title = "Are you absolutely sure?"
    status_code = status.HTTP_428_PRECONDITION_REQUIRED

    def __init__(
        self,
        message: str = (
            "This action cannot be undone. This will permanently delete the entry "
            "and remove its data from your vault."
        ),
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


__all__ = [
    "VaultError",
    "ConfigurationError",
    "RemoteRequestError",
    "EntryNotFoundError",
    "ConfirmationRequiredError",
]
