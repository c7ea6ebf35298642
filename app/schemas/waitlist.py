from pydantic import BaseModel, Field
from typing import Optional
import re

# Loose on purpose: something, "@", something, ".", something.
# "." excludes line terminators, as in a browser regex.
_ANY = r"[^\n\r\u2028\u2029]"
EMAIL_PATTERN = re.compile(rf"{_ANY}+@{_ANY}+\.{_ANY}+")


def is_valid_email(value) -> bool:
    return isinstance(value, str) and bool(value) and EMAIL_PATTERN.search(value) is not None


class WaitlistEntry(BaseModel):
    email: str = Field(..., description="Captured email address, forwarded as entered")
    ip: Optional[str] = Field(None, description="First X-Forwarded-For value")
    user_agent: Optional[str] = Field(None, description="Raw User-Agent header")


class WaitlistAck(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    error: str
