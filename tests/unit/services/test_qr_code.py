import base64

from src.adapter.services import qr_code


def test_encode_returns_svg_data_uri():
    uri = qr_code.encode({"type": "web-auth", "sessionId": "abc", "subjectType": "teacher"})

    prefix = "data:image/svg+xml;base64,"
    assert uri.startswith(prefix)
    svg = base64.b64decode(uri[len(prefix):]).decode("utf-8")
    assert "<svg" in svg


def test_encode_differs_per_payload():
    assert qr_code.encode({"sessionId": "a"}) != qr_code.encode({"sessionId": "b"})
