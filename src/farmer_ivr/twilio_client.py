from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from requests.exceptions import RequestException
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.rest import Client
from twilio.twiml.voice_response import VoiceResponse

from .config import Settings

logger = logging.getLogger(__name__)


class DeliveryError(RuntimeError):
    """The provider rejected or could not complete a send/call."""

    def __init__(self, message: str, status: int | None = None, code: int | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code


@dataclass(frozen=True)
class Receipt:
    # Message SID or Call SID; only logged / echoed back to API callers
    sid: str


class MessagingProvider(Protocol):
    def send_message(self, to: str, body: str) -> Receipt: ...

    def place_call(self, to: str, message: str) -> Receipt: ...


class TwilioProvider:
    """
    MessagingProvider backed by the Twilio REST API.

    Every method is a single blocking SDK call: no retries, at most one
    delivery attempt per invocation.
    """

    def __init__(self, client: Client, from_number: str) -> None:
        self.client = client
        self.from_number = from_number

    @classmethod
    def from_settings(cls, settings: Settings) -> TwilioProvider:
        client = Client(settings.twilio_account_sid, settings.twilio_auth_token)
        return cls(client, settings.twilio_phone_number)

    def send_message(self, to: str, body: str) -> Receipt:
        _require_destination(to)
        try:
            sms = self.client.messages.create(to=to, from_=self.from_number, body=body)
        except (TwilioException, RequestException) as exc:
            logger.warning("Error sending SMS to %s: %s", to, exc)
            raise _delivery_error(exc) from exc

        logger.info("SMS sent successfully: %s", sms.sid)
        return Receipt(sid=sms.sid)

    def place_call(self, to: str, message: str) -> Receipt:
        _require_destination(to)

        twiml = VoiceResponse()
        twiml.say(message)

        try:
            call = self.client.calls.create(to=to, from_=self.from_number, twiml=str(twiml))
        except (TwilioException, RequestException) as exc:
            logger.warning("Error making outbound call to %s: %s", to, exc)
            raise _delivery_error(exc) from exc

        logger.info("Call initiated successfully: %s", call.sid)
        return Receipt(sid=call.sid)


def _require_destination(to: str) -> None:
    if not to or not to.strip():
        raise DeliveryError("Destination phone number is empty")


def _delivery_error(exc: Exception) -> DeliveryError:
    # REST rejections carry Twilio's status and error code; transport failures do not
    if isinstance(exc, TwilioRestException):
        return DeliveryError(exc.msg or str(exc), status=exc.status, code=exc.code)
    return DeliveryError(str(exc) or exc.__class__.__name__)
