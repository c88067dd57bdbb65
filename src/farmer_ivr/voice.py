from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from twilio.twiml.voice_response import VoiceResponse

MENU_PATH: Final[str] = "/webhook"
GATHER_PATH: Final[str] = "/gather"
GATHER_TIMEOUT_SECONDS: Final[int] = 10

WELCOME_PROMPT: Final[str] = (
    "Welcome to the Farmer AI service. "
    "Press 1 for Telugu, Press 2 for English, Press 3 for SMS updates."
)
NO_INPUT_PROMPT: Final[str] = "I did not receive any input. Please try again."
INVALID_SELECTION_PROMPT: Final[str] = "Invalid selection. Please try again."
GOODBYE_PROMPT: Final[str] = "Thank you for using Farmer AI service. Have a great day!"


@dataclass(frozen=True)
class MenuOption:
    language: str
    confirmation: str
    sms_body: str


MENU_OPTIONS: Final[dict[str, MenuOption]] = {
    "1": MenuOption(
        language="te",
        confirmation="మీరు తెలుగు ఎంచుకున్నారు. వ్యవసాయ సమాచారం కోసం మేము మీకు SMS పంపుతాము.",
        sms_body="వ్యవసాయ సమాచారం: ఈ వారం వాతావరణం మంచిది. పంటలకు నీరు ఇవ్వండి.",
    ),
    "2": MenuOption(
        language="en",
        confirmation="You have selected English. We will send you farming information via SMS.",
        sms_body="Farming Update: Weather is good this week. Water your crops regularly.",
    ),
    "3": MenuOption(
        language="en",
        confirmation="You will receive SMS updates on your mobile number.",
        sms_body="You have subscribed to SMS updates from Farmer AI service.",
    ),
}


def render_menu() -> str:
    """
    TwiML for the initial inbound call.

    The "no input" fallback is appended after the (empty) Gather verb, so
    Twilio only reaches it when the gather times out without a digit.
    """
    response = VoiceResponse()
    response.say(WELCOME_PROMPT)
    response.gather(num_digits=1, action=GATHER_PATH, timeout=GATHER_TIMEOUT_SECONDS)
    response.say(NO_INPUT_PROMPT)
    response.redirect(MENU_PATH)
    return str(response)


def select_option(digit: str | None) -> MenuOption | None:
    """Exact match on the gathered digit; anything else is an invalid selection."""
    if digit is None:
        return None
    return MENU_OPTIONS.get(digit)


def render_selection(option: MenuOption | None) -> str:
    """TwiML returned to the caller after a digit has been gathered."""
    response = VoiceResponse()

    if option is not None:
        response.say(option.confirmation)
    else:
        response.say(INVALID_SELECTION_PROMPT)
        response.redirect(MENU_PATH)

    response.say(GOODBYE_PROMPT)
    response.hangup()
    return str(response)
