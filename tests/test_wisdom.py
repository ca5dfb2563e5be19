import json

import pytest

from workbench.alexa import ResponseRoot
from workbench.wisdom import AUTHOR, QUOTE, build_quote_response, handler, main

EVENT = {
    "version": "1.0",
    "session": {
        "new": False,
        "sessionId": "session-1",
        "application": {"applicationId": "app-1"},
        "user": {"userId": "user-1"},
    },
    "context": {
        "System": {
            "device": {"deviceId": "device-1", "supportedInterfaces": {}},
            "application": {"applicationId": "app-1"},
            "user": {"userId": "user-1"},
            "apiEndpoint": "https://api.example.com",
            "apiAccessToken": "token",
        }
    },
    "request": {},
}


def test_build_quote_response_text():
    root = build_quote_response(QUOTE, AUTHOR)
    assert root.version == "1.0"
    assert root.response.output_speech.type == "PlainText"
    assert root.response.output_speech.text == (
        "Alan Kay said The best way to predict the future is to invent it."
    )


def test_build_quote_response_leaves_rest_empty():
    response = build_quote_response("q", "a").response
    assert response.card is None
    assert response.reprompt is None
    assert response.directives is None
    assert response.should_end_session is None
    assert response.output_speech.text == "a said q"


def test_handler_returns_quote_document():
    result = handler(EVENT, None)
    assert result == build_quote_response(QUOTE, AUTHOR).to_dict()
    assert ResponseRoot.from_dict(result) == build_quote_response(QUOTE, AUTHOR)


def test_handler_rejects_malformed_event():
    with pytest.raises(ValueError):
        handler({"version": "1.0"}, None)


def test_main_reads_event_file(tmp_path, capsys):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(EVENT), encoding="utf-8")
    assert main([str(path)]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed == build_quote_response(QUOTE, AUTHOR).to_dict()


def test_main_reports_bad_event(tmp_path):
    path = tmp_path / "event.json"
    path.write_text("{}", encoding="utf-8")
    assert main([str(path)]) == 1


def test_main_reports_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.json")]) == 1