from __future__ import annotations

from pydantic import BaseModel


class TriggerRequest(BaseModel):
    """JSON body for /send-sms and /make-call."""

    message: str
    to: str | None = None
