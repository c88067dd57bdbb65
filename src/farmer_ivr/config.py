from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

REQUIRED_ENV_VARS = ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_PHONE_NUMBER")


class ConfigurationError(RuntimeError):
    """Raised when the process cannot start with the given environment."""


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # --- Twilio account used for inbound webhooks and outbound SMS/calls ---
    twilio_account_sid: str
    twilio_auth_token: str
    twilio_phone_number: str

    # Fallback recipient when neither the request nor the caller gives one
    farmer_mobile_number: str | None = None

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def farmer_mobile_configured(self) -> bool:
        return bool(self.farmer_mobile_number)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build the process-wide settings from environment variables.

    Read once at startup and passed explicitly to create_app().
    Raises ConfigurationError if any Twilio credential is missing.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required Twilio environment variables: {', '.join(missing)}"
        )

    try:
        return Settings(
            twilio_account_sid=env["TWILIO_ACCOUNT_SID"],
            twilio_auth_token=env["TWILIO_AUTH_TOKEN"],
            twilio_phone_number=env["TWILIO_PHONE_NUMBER"],
            farmer_mobile_number=(env.get("FARMER_MOBILE_NUMBER") or "").strip() or None,
            host=env.get("HOST") or "0.0.0.0",
            port=env.get("PORT") or 3000,  # type: ignore[arg-type]
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
