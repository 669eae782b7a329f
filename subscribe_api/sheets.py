"""
Google Sheets adapter: service-account credentials and the one append call.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .config import Settings
from .errors import ConfigurationError, UpstreamError
from .normalize import normalize_private_key
from .rules import GOOGLE_TOKEN_URI, SHEETS_SCOPES, VALUE_INPUT_OPTION

logger = logging.getLogger(__name__)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_credentials(settings: Settings) -> service_account.Credentials:
    private_key = normalize_private_key(settings.google_private_key)
    logger.info("Private key length: %d", len(private_key))

    info = {
        "type": "service_account",
        "client_email": settings.require("google_client_email"),
        "private_key": private_key,
        "token_uri": GOOGLE_TOKEN_URI,
    }
    try:
        return service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)
    except ValueError as e:
        # google-auth raises ValueError for unparseable keys and missing fields
        raise ConfigurationError(f"Invalid service account credentials: {e}") from e


def build_service(credentials):
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


def _error_code(exc: Exception):
    if isinstance(exc, HttpError):
        return exc.resp.status
    return getattr(exc, "code", None)


def _error_details(exc: Exception) -> Any:
    if isinstance(exc, HttpError):
        content = exc.content
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")
        try:
            return json.loads(content)
        except (TypeError, ValueError):
            return content
    return None


def append_row(service, spreadsheet_id: str, row: List[Any], range_: str) -> dict:
    """
    Append one row to `range_` of the spreadsheet.

    Any failure is logged and re-raised as UpstreamError; no retries.
    """
    try:
        response = service.spreadsheets().values().append(
            spreadsheetId=spreadsheet_id,
            range=range_,
            valueInputOption=VALUE_INPUT_OPTION,
            body={"values": [row]},
        ).execute()
    except Exception as e:
        code = _error_code(e)
        details = _error_details(e)
        logger.error("Sheets API Error: message=%s code=%s details=%s", e, code, details)
        raise UpstreamError(str(e), code=code, details=details) from e

    logger.info("Sheets API Response: %s", response)
    return response
