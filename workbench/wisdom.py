"""A skill handler that answers with a programming quote."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from workbench.alexa import OutputSpeech, RequestRoot, Response, ResponseRoot

QUOTE = "The best way to predict the future is to invent it."
AUTHOR = "Alan Kay"

_log = logging.getLogger(__name__)


def build_quote_response(quote: str, author: str) -> ResponseRoot:
    """A plain-text spoken response attributing ``quote`` to ``author``."""
    return ResponseRoot(
        version="1.0",
        session_attributes=None,
        response=Response(
            output_speech=OutputSpeech(type="PlainText", text=f"{author} said {quote}"),
        ),
    )


def handler(event: Any, context: Any) -> dict:
    """Answer a skill request; raise ValueError if the event is malformed."""
    RequestRoot.from_dict(event)
    _log.info("answering with a quote by %s", AUTHOR)
    return build_quote_response(QUOTE, AUTHOR).to_dict()


def main(argv: list[str] | None = None) -> int:
    """Answer one JSON event read from a file or standard input."""
    logging.basicConfig(level=logging.INFO)
    args = sys.argv[1:] if argv is None else argv
    try:
        if args:
            with open(args[0], encoding="utf-8") as handle:
                event = json.load(handle)
        else:
            event = json.load(sys.stdin)
        response = handler(event, None)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(response))
    return 0


if __name__ == "__main__":
    sys.exit(main())