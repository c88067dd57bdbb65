from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import BackgroundTasks, Depends, FastAPI, Form, Request, Response
from fastapi.responses import JSONResponse

from .config import Settings
from .schemas import TriggerRequest
from .twilio_client import DeliveryError, MessagingProvider, TwilioProvider
from .voice import render_menu, render_selection, select_option

logger = logging.getLogger(__name__)

TWIML_MEDIA_TYPE = "application/xml"


def create_app(settings: Settings, provider: MessagingProvider | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Settings are constructed once at process entry and handed in here;
    the provider defaults to the Twilio REST adapter.
    """
    app = FastAPI(title="farmer-ivr", version="0.1.0")
    app.state.settings = settings
    app.state.provider = provider or TwilioProvider.from_settings(settings)

    app.add_api_route("/webhook", voice_webhook, methods=["POST"])
    app.add_api_route("/gather", gather_webhook, methods=["POST"])
    app.add_api_route("/send-sms", send_sms, methods=["POST"])
    app.add_api_route("/make-call", make_call, methods=["POST"])
    app.add_api_route("/health", health, methods=["GET"])
    return app


# --- Dependencies ---


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_provider(request: Request) -> MessagingProvider:
    return request.app.state.provider


# --- Background work ---


def send_sms_in_background(provider: MessagingProvider, to: str, body: str) -> None:
    """
    Background task for the call flow.

    The caller already has their TwiML; a failed send is only logged.
    """
    try:
        provider.send_message(to, body)
    except DeliveryError:
        logger.exception("SMS to %s failed; call flow continues", to)


def resolve_destination(explicit: str | None, settings: Settings) -> str | None:
    # Blank values count as missing so the default recipient still applies
    explicit = explicit.strip() if explicit else None
    return explicit or settings.farmer_mobile_number


# --- Routes ---


def voice_webhook() -> Response:
    """Twilio voice webhook for an inbound call: play the menu and gather one digit."""
    return Response(content=render_menu(), media_type=TWIML_MEDIA_TYPE)


def gather_webhook(
    background_tasks: BackgroundTasks,
    digits: str | None = Form(None, alias="Digits"),
    from_number: str = Form("", alias="From"),
    settings: Settings = Depends(get_settings),
    provider: MessagingProvider = Depends(get_provider),
) -> Response:
    """
    Twilio <Gather> action callback.

    Behaviour:
      - "1" / "2" / "3": confirm, queue one SMS, say goodbye and hang up
      - anything else: say "invalid", redirect to the menu
    """
    logger.info("User pressed: %s, Caller: %s", digits, from_number)

    option = select_option(digits)
    if option is not None:
        to = settings.farmer_mobile_number or from_number.strip()
        if to:
            background_tasks.add_task(send_sms_in_background, provider, to, option.sms_body)
        else:
            logger.warning("No destination for digit %s; SMS not sent", digits)

    return Response(content=render_selection(option), media_type=TWIML_MEDIA_TYPE)


def send_sms(
    payload: TriggerRequest,
    settings: Settings = Depends(get_settings),
    provider: MessagingProvider = Depends(get_provider),
) -> JSONResponse:
    """Send an SMS outside the call flow. `to` defaults to FARMER_MOBILE_NUMBER."""
    target = resolve_destination(payload.to, settings)
    if not target:
        return JSONResponse({"error": "Mobile number is required"}, status_code=400)

    try:
        receipt = provider.send_message(target, payload.message)
    except DeliveryError as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)

    return JSONResponse({"success": True, "messageSid": receipt.sid})


def make_call(
    payload: TriggerRequest,
    settings: Settings = Depends(get_settings),
    provider: MessagingProvider = Depends(get_provider),
) -> JSONResponse:
    """Place an outbound call that speaks `message`. `to` defaults to FARMER_MOBILE_NUMBER."""
    target = resolve_destination(payload.to, settings)
    if not target:
        return JSONResponse({"error": "Mobile number is required"}, status_code=400)

    try:
        receipt = provider.place_call(target, payload.message)
    except DeliveryError as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)

    return JSONResponse({"success": True, "callSid": receipt.sid})


def health(settings: Settings = Depends(get_settings)) -> JSONResponse:
    timestamp = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return JSONResponse(
        {
            "status": "healthy",
            "timestamp": timestamp,
            "farmerMobileConfigured": settings.farmer_mobile_configured,
        }
    )
