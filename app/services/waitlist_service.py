from typing import Optional
import logging

import httpx

from app.core.config import Settings
from app.core.exceptions import ValidationError, ConfigurationError
from app.schemas.waitlist import WaitlistEntry, is_valid_email
from app.services.supabase_service import SupabaseService

logger = logging.getLogger(__name__)

INVALID_EMAIL_MESSAGE = "Invalid email"
NOT_CONFIGURED_MESSAGE = "Server not configured (missing SUPABASE_* envs)"


def client_ip(forwarded_for: Optional[str]) -> Optional[str]:
    """First hop of an X-Forwarded-For header, or None."""
    first = (forwarded_for or "").split(",")[0].strip()
    return first or None


class WaitlistService:
    """Validates a waitlist signup and relays it to the Supabase table."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def build_entry(self, payload, forwarded_for: Optional[str] = None, user_agent: Optional[str] = None) -> WaitlistEntry:
        if not isinstance(payload, dict):
            payload = {}
        email = payload.get("email")
        if not is_valid_email(email):
            raise ValidationError(INVALID_EMAIL_MESSAGE)
        return WaitlistEntry(email=email, ip=client_ip(forwarded_for), user_agent=user_agent or None)

    async def submit(self, payload, forwarded_for: Optional[str] = None, user_agent: Optional[str] = None) -> WaitlistEntry:
        entry = self.build_entry(payload, forwarded_for, user_agent)

        logger.info(f"SUPABASE_URL: {self.settings.SUPABASE_URL}")
        logger.info(f"HAS_KEY: {bool(self.settings.SUPABASE_ANON_KEY)}")
        if not self.settings.supabase_configured:
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

        svc = SupabaseService(self.settings.SUPABASE_URL, self.settings.SUPABASE_ANON_KEY, transport=self.transport)
        try:
            await svc.insert_waitlist_entry(self.settings.SUPABASE_WAITLIST_TABLE, entry)
        finally:
            await svc.close()
        return entry
