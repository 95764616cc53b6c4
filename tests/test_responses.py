from __future__ import annotations

import json

from steam_core.models import ErrorKind, Failure, Success
from steam_core.responses import envelope, is_failure, normalize, render


def test_normalize_keeps_payload_identity():
    payload = {"response": {"player_count": 5, "result": 1, "extra": [1, 2]}}
    assert normalize(payload).payload is payload


def test_success_envelope():
    assert envelope(Success(payload={"a": 1})) == {"success": True, "data": {"a": 1}}


def test_failure_envelope_carries_detail():
    failure = Failure(ErrorKind.NETWORK_ERROR, "down", {"error": "ConnectError"})
    assert envelope(failure) == {
        "success": False,
        "error": {"kind": "NetworkError", "message": "down", "detail": {"error": "ConnectError"}},
    }


def test_failure_envelope_omits_empty_detail():
    assert "detail" not in envelope(Failure(ErrorKind.UNKNOWN_TOOL, "Unknown tool: x"))["error"]


def test_render_is_indented_json():
    text = render(Success(payload={"applist": {"apps": []}}))
    assert text.startswith("{\n  ")
    assert json.loads(text) == {"success": True, "data": {"applist": {"apps": []}}}


def test_render_tolerates_non_json_detail():
    failure = Failure(ErrorKind.UPSTREAM_INTERNAL_ERROR, "odd", {"payload": b"\x00raw"})
    assert json.loads(render(failure))["error"]["detail"]["payload"] == str(b"\x00raw")


def test_is_failure():
    assert is_failure(Failure(ErrorKind.INTERNAL_ERROR, "x"))
    assert not is_failure(Success(payload=None))
