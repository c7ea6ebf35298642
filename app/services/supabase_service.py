from typing import Optional
import json
import logging

import httpx

from app.core.exceptions import ExternalServiceError
from app.schemas.waitlist import WaitlistEntry

logger = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "Supabase error"


def extract_error_message(body: str) -> str:
    """Pick a human-readable message out of a PostgREST error body.

    Order: ``message``, then ``hint``, then the raw body, then a generic label.
    """
    data = {}
    try:
        data = json.loads(body)
    except ValueError:
        pass
    if not isinstance(data, dict):
        data = {}
    for key in ("message", "hint"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return body or FALLBACK_ERROR_MESSAGE


class SupabaseService:
    def __init__(self, base_url: str, api_key: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport, headers={
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        })

    async def insert_row(self, table: str, row: dict) -> httpx.Response:
        resp = await self._client.post(f"/rest/v1/{table}", json=row)
        logger.info(f"Supabase status: {resp.status_code} body: {resp.text}")
        if not resp.is_success:
            raise ExternalServiceError(extract_error_message(resp.text), status_code=resp.status_code, details=resp.text)
        return resp

    async def insert_waitlist_entry(self, table: str, entry: WaitlistEntry) -> httpx.Response:
        return await self.insert_row(table, entry.model_dump())

    async def close(self):
        await self._client.aclose()
