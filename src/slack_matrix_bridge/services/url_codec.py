import base64
import binascii

ALLOWED_SCHEMES = ("http://", "https://")
MIN_ENCODED_LENGTH = 5


def encode_matrix_url(url: str) -> str:
    encoded = base64.urlsafe_b64encode(url.encode("utf-8")).decode("ascii")
    return encoded.rstrip("=")


def decode_matrix_url(encoded: str) -> str:
    # Accepts both the URL-safe alphabet and standard base64, padded or not.
    normalized = (encoded or "").strip().replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    try:
        return base64.b64decode(normalized, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValueError("invalid base64 encoded destination URL") from exc


def has_allowed_scheme(url: str) -> bool:
    return url.startswith(ALLOWED_SCHEMES)


def is_valid_base64_url(encoded: str) -> bool:
    if not encoded or len(encoded) < MIN_ENCODED_LENGTH:
        return False
    try:
        decoded = decode_matrix_url(encoded)
    except ValueError:
        return False
    return has_allowed_scheme(decoded)
