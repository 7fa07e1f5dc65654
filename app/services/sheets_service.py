"""
app/services/sheets_service.py

Purpose: Google Sheets integration (tabular store client)

- Reads ranges, appends rows and batch-updates cells via the Sheets v4 values API
- Bootstraps service-account credentials from settings on every call
- Finds rows by key with a linear scan (header row skipped)
- Classifies failures into StoreErrorKind at the point of failure
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2.service_account import Credentials

from app.core.config import Settings
from app.core.exceptions import (
    StoreError,
    StoreUnavailable,
    StoreAuthError,
    StorePermissionError,
)
from app.core.logging import get_logger

logger = get_logger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

REQUIRED_CREDENTIAL_FIELDS = ("client_email", "private_key")

# User text is stored verbatim, never parsed as formulas or numbers
VALUE_INPUT_OPTION = "RAW"

# Full column range read for each known table
TABLE_RANGES = {
    "Users": "Users!A:I",
    "Seats": "Seats!A:F",
    "Tracking": "Tracking!A:C",
}

TABLE_WIDTHS = {
    "Users": 9,
    "Seats": 6,
    "Tracking": 3,
}

TokenProvider = Callable[[], Awaitable[str]]


@dataclass(frozen=True)
class RowHandle:
    """
    Result of a key lookup. `row_number` is the 1-based sheet row and is only
    valid for the operation that produced it.
    """
    values: List[str]
    row_number: int


@dataclass(frozen=True)
class CellUpdate:
    range: str
    value: Any


def load_service_account_info(raw: Optional[str]) -> Dict[str, Any]:
    """
    Parses the credential blob from settings.

    Escaped newlines in `private_key` are turned into real ones.

    Raises:
        StoreUnavailable: If the blob is missing, not JSON or incomplete
    """
    if not raw or not raw.strip():
        raise StoreUnavailable("GOOGLE_SERVICE_ACCOUNT_JSON is not set")

    try:
        info = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StoreUnavailable(f"Credential blob is not valid JSON: {e.msg}")

    if not isinstance(info, dict):
        raise StoreUnavailable("Credential blob must be a JSON object")

    missing = [field for field in REQUIRED_CREDENTIAL_FIELDS if not info.get(field)]
    if missing:
        raise StoreUnavailable(f"Credential blob missing fields: {', '.join(missing)}")

    info["private_key"] = info["private_key"].replace("\\n", "\n")
    return info


class SheetsService:
    """
    Service class for reading and writing spreadsheet rows.
    Each call authorizes afresh; nothing is cached between calls.
    """

    def __init__(
        self,
        config: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
        token_provider: Optional[TokenProvider] = None
    ):
        self._config = config
        self._http_client = http_client
        self._token_provider = token_provider
        self._timeout = config.HTTP_TIMEOUT_SECONDS

    @property
    def _base_url(self) -> str:
        return f"{self._config.SHEETS_API_BASE}/{self._config.SPREADSHEET_ID}"

    async def _access_token(self) -> str:
        """
        Authorizes the service account and returns a bearer token.

        Raises:
            StoreUnavailable: Credentials missing or malformed (no network call made)
            StoreAuthError: The token endpoint rejected the identity
        """
        if self._token_provider is not None:
            return await self._token_provider()

        if not self._config.SPREADSHEET_ID:
            raise StoreUnavailable("SPREADSHEET_ID is not set")

        info = load_service_account_info(self._config.GOOGLE_SERVICE_ACCOUNT_JSON)

        try:
            credentials = Credentials.from_service_account_info(info, scopes=SCOPES)
        except (ValueError, KeyError) as e:
            raise StoreUnavailable(f"Invalid service account key: {e}")

        try:
            await asyncio.to_thread(credentials.refresh, GoogleAuthRequest())
        except RefreshError as e:
            logger.error(f"Service account authorization rejected: {e}")
            raise StoreAuthError(str(e))

        return credentials.token

    async def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        token = await self._access_token()
        headers = {"Authorization": f"Bearer {token}"}

        try:
            if self._http_client is not None:
                response = await self._http_client.request(method, url, headers=headers, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException:
            logger.error(f"Sheets API timeout: {method} {url}")
            raise StoreError("Sheets API timed out")
        except httpx.RequestError as e:
            logger.error(f"Network error calling Sheets API: {e}")
            raise StoreError("Unable to reach Sheets API")

        if response.status_code == 401:
            raise StoreAuthError(f"Sheets API rejected credentials: {response.text[:200]}")
        if response.status_code in (403, 404):
            raise StorePermissionError(
                f"Sheets API denied access ({response.status_code}): {response.text[:200]}"
            )
        if response.status_code >= 400:
            logger.error(f"Sheets API error: {response.status_code} - {response.text[:200]}")
            raise StoreError(f"Sheets API error: {response.status_code}")

        return response.json() if response.content else {}

    async def get_rows(self, cell_range: str) -> List[List[str]]:
        """
        Reads a range.

        Args:
            cell_range: A1 range, e.g. "Seats!A:F"

        Returns:
            Rows as lists of strings; [] if the range holds no data
        """
        data = await self._request("GET", f"{self._base_url}/values/{cell_range}")
        rows = data.get("values", [])
        logger.debug(f"Read {len(rows)} rows from {cell_range}")
        return rows

    async def find_row_by_key(self, table: str, key_column: int, key_value: str) -> Optional[RowHandle]:
        """
        Returns the first data row whose `key_column` cell equals `key_value`.

        Row 0 of the range is the header and is never matched. Comparison is
        exact on the string form of both sides.

        Args:
            table: Sheet name, e.g. "Users"
            key_column: 0-based column index
            key_value: Value to match

        Returns:
            RowHandle with the 1-based sheet row number, or None
        """
        rows = await self.get_rows(TABLE_RANGES.get(table, table))
        key_value = str(key_value)

        for index, row in enumerate(rows):
            if index == 0:
                continue
            if len(row) > key_column and str(row[key_column]) == key_value:
                return RowHandle(values=list(row), row_number=index + 1)

        return None

    async def append_row(self, table: str, values: List[Any]) -> Dict[str, Any]:
        """
        Appends one row. Values must already be in the table's column order.

        Raises:
            ValueError: If more values are given than the table has columns
        """
        width = TABLE_WIDTHS.get(table)
        if width is not None and len(values) > width:
            raise ValueError(f"{table} has {width} columns, got {len(values)} values")

        result = await self._request(
            "POST",
            f"{self._base_url}/values/{table}!A1:append",
            params={"valueInputOption": VALUE_INPUT_OPTION, "insertDataOption": "INSERT_ROWS"},
            json={"values": [values]}
        )
        logger.info(f"Appended row to {table}")
        return result

    async def batch_update_cells(self, updates: List[CellUpdate]) -> Dict[str, Any]:
        """
        Writes several independently addressed cells in one request.

        The store does not guarantee cross-cell atomicity; on failure treat
        the update as possibly partially applied.
        """
        if not updates:
            return {}

        body = {
            "valueInputOption": VALUE_INPUT_OPTION,
            "data": [
                {"range": update.range, "values": [[update.value]]}
                for update in updates
            ]
        }
        result = await self._request("POST", f"{self._base_url}/values:batchUpdate", json=body)
        logger.info(f"Batch updated {len(updates)} cells")
        return result
