from __future__ import annotations

from dotenv import load_dotenv

# Pick up TWILIO_* / FARMER_MOBILE_NUMBER from a local .env during development.
load_dotenv()
