"""Domain level exceptions shared across the service."""

from __future__ import annotations

from typing import Any

__all__ = [
    "AppError",
    "InvalidRequestError",
    "NotFoundError",
    "StyleNotFoundError",
    "MissingStyleAttributesError",
    "StyleDataError",
    "UpstreamError",
    "PlmRequestError",
    "TokenAcquisitionError",
    "QueueClearedError",
    "ensure_style_id",
]


class AppError(Exception):
    """Base class for application specific errors."""


class InvalidRequestError(AppError):
    """Raised when a caller supplies a malformed or missing identifier."""


class NotFoundError(AppError):
    """Raised when a record or its partition data could not be located."""


class StyleNotFoundError(NotFoundError):
    """Raised when PLM returns no style for the requested id."""

    def __init__(self, style_id: int) -> None:
        super().__init__(f"Style not found: {style_id}")
        self.style_id = style_id


class MissingStyleAttributesError(NotFoundError):
    """Raised when Brand, Season or ProductSubSubCategory is empty."""

    def __init__(self, style_id: int, missing: list[str]) -> None:
        super().__init__(
            f"Missing required fields for StyleId {style_id}: {', '.join(missing)}"
        )
        self.style_id = style_id
        self.missing = missing


class StyleDataError(NotFoundError):
    """Raised when partition attributes are too short to build a code prefix."""


class UpstreamError(AppError):
    """Base class for failures of external collaborators."""


class PlmRequestError(UpstreamError):
    """Raised when a PLM API call fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class TokenAcquisitionError(UpstreamError):
    """Raised when the OAuth provider does not issue a token."""


class QueueClearedError(AppError):
    """Raised into the handle of a queued task dropped by ``clear()``."""


def ensure_style_id(value: object) -> int:
    """Validate a style identifier coming from an HTTP payload."""

    if isinstance(value, bool) or value is None:
        raise InvalidRequestError("Missing required field: styleId")
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            raise InvalidRequestError(f"Invalid styleId: {value!r}")
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise InvalidRequestError(f"Invalid styleId: {value!r}")
    return value
