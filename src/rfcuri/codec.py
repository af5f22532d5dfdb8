"""rfcuri.codec
Percent-encoding as described in RFC 3986 section 2.1.
"""

from .errors import DecodeError
from .grammar import PCT_ENCODED_RUN_PAT, is_unreserved

_DEFAULT_ENCODING: str = "utf-8"


def decode(text: str, errors: str = "strict") -> str:
    """Replaces every run of pct-encoded triples with the characters its octets encode.
    A "%" that does not start a pct-encoded triple raises DecodeError.
    errors is passed to bytes.decode; use "surrogateescape" to keep octets that are not valid UTF-8.
    """
    result: str = ""
    # Even indices are literal text, odd indices are runs of %HH triples.
    for i, part in enumerate(PCT_ENCODED_RUN_PAT.split(text)):
        if i % 2 == 0:
            if "%" in part:
                raise DecodeError(text, "malformed percent-encoding")
            result += part
            continue
        octets: bytes = bytes.fromhex(part.replace("%", ""))
        try:
            result += octets.decode(_DEFAULT_ENCODING, errors)
        except UnicodeDecodeError as e:
            raise DecodeError(text, f"invalid {_DEFAULT_ENCODING} sequence {part!r}") from e
    return result


def _octets(c: str) -> bytes:
    try:
        return c.encode(_DEFAULT_ENCODING, "surrogateescape")
    except UnicodeEncodeError:
        # A lone surrogate that did not come from surrogateescape.
        return c.encode(_DEFAULT_ENCODING, "surrogatepass")


def encode(text: str) -> str:
    """Percent-encodes every character that is not unreserved, one triple per octet.
    e.g. encode("a b/ü") == "a%20b%2F%C3%BC"
    """
    return "".join(c if is_unreserved(c) else "".join(f"%{b:02X}" for b in _octets(c)) for c in text)
