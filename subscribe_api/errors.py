from __future__ import annotations

from typing import Any, Optional, Union


class SubscribeError(Exception):
    """Base for failures the subscribe handler turns into a 500 response."""

    def __init__(self, message: str, code: Optional[Union[str, int]] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigurationError(SubscribeError):
    """A required environment value is missing or unusable."""


class UpstreamError(SubscribeError):
    """The spreadsheet API call failed (network, auth, quota...)."""

    def __init__(
        self,
        message: str,
        code: Optional[Union[str, int]] = None,
        details: Any = None,
    ):
        super().__init__(message, code)
        self.details = details
