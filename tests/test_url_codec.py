import base64

import pytest

from slack_matrix_bridge.services.url_codec import decode_matrix_url, encode_matrix_url, is_valid_base64_url


def test_url_round_trip() -> None:
    url = "https://hookshot.example.com/webhooks/v2/abcdef?x=1&y=~z"
    encoded = encode_matrix_url(url)
    assert "=" not in encoded
    assert decode_matrix_url(encoded) == url


def test_decode_accepts_standard_base64() -> None:
    url = "https://matrix.example.com/_matrix/hooks/slack/abc123"
    encoded = base64.b64encode(url.encode("utf-8")).decode("ascii")
    assert decode_matrix_url(encoded) == url
    assert is_valid_base64_url(encoded)


def test_decode_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        decode_matrix_url("not*base64!")
    with pytest.raises(ValueError):
        decode_matrix_url("abcde")


def test_short_or_missing_input_is_invalid() -> None:
    assert not is_valid_base64_url("")
    assert not is_valid_base64_url("aHR0")


def test_non_http_destination_is_invalid() -> None:
    assert not is_valid_base64_url(encode_matrix_url("ftp://files.example.com/upload"))
    assert not is_valid_base64_url(encode_matrix_url("javascript:alert(1)"))
    assert is_valid_base64_url(encode_matrix_url("http://localhost:9000/hook"))
