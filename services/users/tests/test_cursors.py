import pytest

from services.users.domain.errors import ValidationError
from services.users.infrastructure.cursors import decode_cursor, encode_cursor


def test_cursor_round_trip_preserves_key():
    last_key = {"id": "1234", "name": "Test user"}
    token = encode_cursor(last_key)
    assert isinstance(token, str)
    assert "{" not in token
    assert decode_cursor(token) == last_key


def test_empty_cursor_values():
    assert encode_cursor(None) is None
    assert encode_cursor({}) is None
    assert decode_cursor(None) is None
    assert decode_cursor("") is None


@pytest.mark.parametrize("token", ["not base64!", "bnVsbA", "W10"])
def test_decode_cursor_rejects_garbage(token):
    # "bnVsbA" is "null" and "W10" is "[]".
    with pytest.raises(ValidationError, match="invalid cursor"):
        decode_cursor(token)
