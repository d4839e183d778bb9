"""TableService over the Bitable open REST API.

The REST API differs from the engine's view of the store in three ways that
this adapter hides:

    - records are keyed by field *name*; the engine keys them by field id,
    - link cells are written as a plain list of record ids, while the engine
      produces the object shape (see duplex_copy.link.codec.encode),
    - calls are blocking HTTP requests; they are run in a worker thread so the
      TableService coroutines do not block the event loop.

Authentication uses an internal-app tenant access token, fetched on first use
and refreshed shortly before it expires.

Example:
    >>> config = DuplexCopyConfig(app_id="cli_xxx", app_secret="...", app_token="bascnXXXX")
    >>> service = BitableTableService.from_config(config)
    >>> fields = await service.get_field_metadata("tblXXXX")
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import requests

from duplex_copy.core.config import DuplexCopyConfig
from duplex_copy.core.constants import DEFAULT_BASE_URL, LINK_FIELD_TYPES, REST_MAX_PAGE_SIZE
from duplex_copy.core.exceptions import DuplexCopyNotFoundError, TableServiceError
from duplex_copy.core.logging_config import LoggerMixin
from duplex_copy.core.models import FieldMeta, NewRecordSpec, Record
from duplex_copy.link.codec import record_ids_of

# Refresh the tenant token this many seconds before the server-side expiry
TOKEN_REFRESH_MARGIN = 60


class BitableTableService(LoggerMixin):
    """TableService implementation backed by the Bitable REST API.

    Args:
        app_id: Internal application id.
        app_secret: Internal application secret.
        app_token: Token of the base holding the tables.
        base_url: Root of the open API.
        timeout: HTTP timeout in seconds.
        session: Optional requests session, e.g. with custom adapters.
    """

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        app_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.app_id = app_id
        self.app_secret = app_secret
        self.app_token = app_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._token: str | None = None
        self._token_expires_at = 0.0
        self._fields: dict[str, list[FieldMeta]] = {}

    @classmethod
    def from_config(cls, config: DuplexCopyConfig, session: requests.Session | None = None) -> "BitableTableService":
        """Build a service from a DuplexCopyConfig.

        Raises:
            DuplexCopyConfigurationError: If credentials or the base token are missing.
        """
        config.require_credentials()
        return cls(
            app_id=config.app_id,
            app_secret=config.app_secret,
            app_token=config.app_token,
            base_url=config.base_url,
            timeout=config.request_timeout,
            session=session,
        )

    def close(self) -> None:
        self.session.close()

    # -- HTTP -----------------------------------------------------------

    def _tenant_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        payload = self._send(
            "POST",
            "/auth/v3/tenant_access_token/internal",
            json={"app_id": self.app_id, "app_secret": self.app_secret},
        )
        self._token = payload.get("tenant_access_token")
        if not self._token:
            raise TableServiceError("Token response did not contain tenant_access_token")
        self._token_expires_at = time.monotonic() + int(payload.get("expire", 0)) - TOKEN_REFRESH_MARGIN
        self._logger.debug("Obtained tenant access token, valid for %ss", payload.get("expire"))
        return self._token

    def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Issue one request and return the decoded body.

        Raises:
            TableServiceError: On transport errors, non-JSON bodies, a non-zero
                API code or an HTTP error status.
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, params=params, json=json, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TableServiceError(f"{method} {path} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            raise TableServiceError(
                f"{method} {path} returned HTTP {response.status_code} without a JSON body",
                code=response.status_code,
            )

        code = payload.get("code", 0)
        if code:
            raise TableServiceError(payload.get("msg") or f"{method} {path} failed", code=code)
        if not response.ok:
            raise TableServiceError(f"{method} {path} returned HTTP {response.status_code}", code=response.status_code)
        return payload

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self._tenant_token()}"}
        payload = self._send(method, path, params=params, json=json, headers=headers)
        return payload.get("data") or {}

    def _table_path(self, table_id: str) -> str:
        return f"/bitable/v1/apps/{self.app_token}/tables/{table_id}"

    def _paged(self, path: str, limit: int | None = None) -> list[dict[str, Any]]:
        """Collect items across pages, stopping once limit items were read."""
        items: list[dict[str, Any]] = []
        page_token = None
        while limit is None or len(items) < limit:
            page_size = REST_MAX_PAGE_SIZE if limit is None else min(REST_MAX_PAGE_SIZE, limit - len(items))
            params: dict[str, Any] = {"page_size": page_size}
            if page_token:
                params["page_token"] = page_token
            data = self._request("GET", path, params=params)
            items.extend(data.get("items") or [])
            page_token = data.get("page_token")
            if not data.get("has_more") or not page_token:
                break
        return items if limit is None else items[:limit]

    # -- translation ----------------------------------------------------

    def _cached_fields(self, table_id: str) -> list[FieldMeta]:
        if table_id not in self._fields:
            self._load_fields(table_id)
        return self._fields[table_id]

    def _load_fields(self, table_id: str) -> list[FieldMeta]:
        items = self._paged(f"{self._table_path(table_id)}/fields")
        fields = [FieldMeta.model_validate(item) for item in items]
        self._fields[table_id] = fields
        return fields

    def _to_engine_fields(self, table_id: str, values: dict[str, Any]) -> dict[str, Any]:
        by_name = {f.name: f.id for f in self._cached_fields(table_id)}
        return {by_name[name]: value for name, value in values.items() if name in by_name}

    def _to_rest_fields(self, table_id: str, values: dict[str, Any]) -> dict[str, Any]:
        by_id = {f.id: f for f in self._cached_fields(table_id)}
        rest: dict[str, Any] = {}
        for field_id, value in values.items():
            meta = by_id.get(field_id)
            if meta is None:
                raise DuplexCopyNotFoundError(f"Field {field_id} not found in table {table_id}")
            rest[meta.name] = record_ids_of(value) if meta.type in LINK_FIELD_TYPES else value
        return rest

    # -- blocking operations --------------------------------------------

    def _records(self, table_id: str, page_size: int) -> list[Record]:
        items = self._paged(f"{self._table_path(table_id)}/records", limit=page_size)
        return [
            Record(record_id=item["record_id"], fields=self._to_engine_fields(table_id, item.get("fields") or {}))
            for item in items
        ]

    def _cell_value(self, table_id: str, field_id: str, record_id: str) -> Any:
        meta = next((f for f in self._cached_fields(table_id) if f.id == field_id), None)
        if meta is None:
            raise DuplexCopyNotFoundError(f"Field {field_id} not found in table {table_id}")
        data = self._request("GET", f"{self._table_path(table_id)}/records/{record_id}")
        record = data.get("record") or {}
        return (record.get("fields") or {}).get(meta.name)

    def _add_records(self, table_id: str, specs: list[NewRecordSpec]) -> list[str]:
        record_ids: list[str] = []
        for start in range(0, len(specs), REST_MAX_PAGE_SIZE):
            chunk = specs[start : start + REST_MAX_PAGE_SIZE]
            body = {"records": [{"fields": self._to_rest_fields(table_id, spec.fields)} for spec in chunk]}
            data = self._request("POST", f"{self._table_path(table_id)}/records/batch_create", json=body)
            record_ids.extend(r["record_id"] for r in data.get("records") or [])
        self._logger.debug("batch_create wrote %d records to %s", len(record_ids), table_id)
        return record_ids

    # -- TableService ---------------------------------------------------

    async def get_field_metadata(self, table_id: str) -> list[FieldMeta]:
        return await asyncio.to_thread(self._load_fields, table_id)

    async def get_records(self, table_id: str, page_size: int) -> list[Record]:
        return await asyncio.to_thread(self._records, table_id, page_size)

    async def get_cell_value(self, table_id: str, field_id: str, record_id: str) -> Any:
        return await asyncio.to_thread(self._cell_value, table_id, field_id, record_id)

    async def add_records(self, table_id: str, specs: list[NewRecordSpec]) -> list[str]:
        return await asyncio.to_thread(self._add_records, table_id, specs)
