from typing import Optional
import json
import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.exceptions import ValidationError, ConfigurationError, ExternalServiceError
from app.schemas.waitlist import WaitlistAck, ErrorResponse
from app.services.waitlist_service import WaitlistService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["waitlist"])  # /api/waitlist

SERVER_ERROR_MESSAGE = "Server error"


def get_outbound_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outbound Supabase calls; None means httpx's default."""
    return None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def _read_json(request: Request):
    body = await request.body()
    try:
        return json.loads(body)
    except ValueError:
        return {}


@router.post(
    "/waitlist",
    response_model=WaitlistAck,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def join_waitlist(
    request: Request,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_outbound_transport),
):
    """Capture a waitlist email and relay it to the Supabase waitlist table."""
    try:
        payload = await _read_json(request)
        service = WaitlistService(settings, transport=transport)
        await service.submit(
            payload,
            forwarded_for=request.headers.get("x-forwarded-for"),
            user_agent=request.headers.get("user-agent"),
        )
        return WaitlistAck()
    except ValidationError as e:
        return _error(400, e.message)
    except ConfigurationError as e:
        logger.error(e.message)
        return _error(500, e.message)
    except ExternalServiceError as e:
        logger.warning(f"Supabase rejected waitlist entry status={e.status_code} message={e.message}")
        return _error(e.status_code, e.message)
    except Exception:
        logger.exception("Waitlist API crash")
        return _error(500, SERVER_ERROR_MESSAGE)
