from __future__ import annotations

import argparse

from farmer_ivr.voice import render_menu, render_selection, select_option


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Print the TwiML the IVR returns, without Twilio credentials."
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("menu", help="TwiML for an inbound call (/webhook).")
    gather = sub.add_parser("gather", help="TwiML after a digit is pressed (/gather).")
    gather.add_argument("digit", type=str)
    args = parser.parse_args()

    if args.command == "menu":
        print(render_menu())
        return

    option = select_option(args.digit)
    print(render_selection(option))
    if option is None:
        print("\n(no SMS would be sent)")
    else:
        print(f"\nSMS body ({option.language}): {option.sms_body}")


if __name__ == "__main__":
    main()
