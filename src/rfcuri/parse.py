"""rfcuri.parse
RFC 3986 parsers for URIs, relative references, URI-references and paths.

Every production is a function (data, pos) -> (value, end) | None that consumes a prefix of data[pos:].
None means the production does not match at pos, and the caller moves on to its next alternative.
Ambiguous productions are resolved by trying their alternatives in a fixed order.
Only the parse_* entry points raise.
"""

import ipaddress
import logging
import re

from typing import Callable, TypeVar

from .components import (
    Authority,
    Fragment,
    HostInfo,
    HostKind,
    Path,
    PathKind,
    Query,
    Scheme,
    SchemeKind,
    UserInfo,
)
from .errors import ParseError
from .grammar import (
    FRAGMENT_PAT,
    IPV4ADDRESS_PAT,
    IPV6_LITERAL_PAT,
    IPVFUTURE_LITERAL_PAT,
    PATH_ABEMPTY_PAT,
    PATH_ABSOLUTE_PAT,
    PATH_NOSCHEME_PAT,
    PATH_ROOTLESS_PAT,
    PCHAR_PAT,
    PORT_PAT,
    QUERY_PAIR_SEP_PAT,
    QUERY_PAT,
    REG_NAME_PAT,
    SCHEME_PAT,
    USERINFO_PAT,
    USERINFO_SPLIT_PAT,
)
from .uri import URI, URIReference, URIRelativeReference

logger = logging.getLogger(__name__)

T = TypeVar("T")
Parser = Callable[[str, int], tuple[T, int] | None]

_MAX_PORT: int = 65535

# Checked case-insensitively against the whole scheme, so that e.g. "httpx" stays an ordinary scheme.
_FAST_PATH_SCHEMES: dict[str, SchemeKind] = {
    "https": SchemeKind.HTTPS,
    "http": SchemeKind.HTTP,
}


def _first_of(*alternatives: Parser[T]) -> Parser[T]:
    """Ordered choice: the result of the first alternative that matches at pos."""

    def parse(data: str, pos: int) -> tuple[T, int] | None:
        for alternative in alternatives:
            parsed: tuple[T, int] | None = alternative(data, pos)
            if parsed is not None:
                return parsed
        return None

    return parse


def _optional(prefix: str, parser: Parser[T], data: str, pos: int) -> tuple[T | None, int]:
    """[ prefix parser ]"""
    if data.startswith(prefix, pos):
        parsed: tuple[T, int] | None = parser(data, pos + len(prefix))
        if parsed is not None:
            return parsed
    return None, pos


def _span(pattern: re.Pattern[str], data: str, pos: int) -> str:
    """The text matched at pos by a *( ... ) production, which may be empty."""
    m = pattern.match(data, pos)
    return m[0] if m else ""


# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
def _scheme(data: str, pos: int) -> tuple[Scheme, int] | None:
    m = SCHEME_PAT.match(data, pos)
    if m is None:
        return None
    return Scheme(raw=m[0], kind=_FAST_PATH_SCHEMES.get(m[0].lower(), SchemeKind.OTHER)), m.end()


# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
def _userinfo(data: str, pos: int) -> tuple[UserInfo, int]:
    """Matches the whole userinfo span first, then splits it into username [ ":" password ].
    A span that cannot be split is kept as an unparsed UserInfo.
    """
    raw: str = _span(USERINFO_PAT, data, pos)
    split = USERINFO_SPLIT_PAT.fullmatch(raw)
    if split is None:
        return UserInfo(raw=raw), pos + len(raw)
    return UserInfo(raw=raw, username=split["username"], password=split["password"]), pos + len(raw)


# IP-literal = "[" IPv6address "]"
def _ipv6_literal(data: str, pos: int) -> tuple[HostInfo, int] | None:
    m = IPV6_LITERAL_PAT.match(data, pos)
    if m is None:
        return None
    try:
        address: ipaddress.IPv6Address = ipaddress.IPv6Address(m["address"])
    except ValueError:
        logger.debug("ipaddress rejected IPv6address %r", m["address"])
        return None
    return HostInfo(raw=m["address"], kind=HostKind.IPV6, address=address), m.end()


# IP-literal = "[" IPvFuture "]"
def _ipvfuture_literal(data: str, pos: int) -> tuple[HostInfo, int] | None:
    m = IPVFUTURE_LITERAL_PAT.match(data, pos)
    if m is None:
        return None
    return HostInfo(raw=m["address"], kind=HostKind.IPVFUTURE), m.end()


# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
def _ipv4address(data: str, pos: int) -> tuple[HostInfo, int] | None:
    """Only matches when the IPv4address is the whole reg-name span at pos.
    Otherwise "1.2.3.4x" would be cut short instead of being read as a reg-name.
    """
    raw: str = _span(REG_NAME_PAT, data, pos)
    if IPV4ADDRESS_PAT.fullmatch(raw) is None:
        return None
    return HostInfo(raw=raw, kind=HostKind.IPV4, address=ipaddress.IPv4Address(raw)), pos + len(raw)


# reg-name = *( unreserved / pct-encoded / sub-delims )
def _reg_name(data: str, pos: int) -> tuple[HostInfo, int] | None:
    raw: str = _span(REG_NAME_PAT, data, pos)
    return HostInfo(raw=raw, kind=HostKind.REG_NAME), pos + len(raw)


# host = IP-literal / IPv4address / reg-name
# reg-name accepts every IPv4address, so IPv4address has to come first.
_host: Parser[HostInfo] = _first_of(_ipv6_literal, _ipvfuture_literal, _ipv4address, _reg_name)


# port = 1*DIGIT
def _port(data: str, pos: int) -> tuple[int, int] | None:
    m = PORT_PAT.match(data, pos)
    if m is None:
        return None
    port: int = int(m[0], base=10)
    if port > _MAX_PORT:
        logger.debug("Port %s is out of range", m[0])
        return None
    return port, m.end()


# authority = [ userinfo "@" ] host [ ":" port ]
def _authority(data: str, pos: int) -> tuple[Authority, int] | None:
    start: int = pos
    userinfo: UserInfo | None = None
    candidate, end = _userinfo(data, pos)
    if data.startswith("@", end):
        userinfo, pos = candidate, end + 1
    parsed_host: tuple[HostInfo, int] | None = _host(data, pos)
    if parsed_host is None:
        return None
    host, pos = parsed_host
    port, pos = _optional(":", _port, data, pos)
    return Authority(raw=data[start:pos], userinfo=userinfo, host=host, port=port), pos


def _path(pattern: re.Pattern[str], kind: PathKind) -> Parser[Path]:
    def parse(data: str, pos: int) -> tuple[Path, int] | None:
        m = pattern.match(data, pos)
        if m is None:
            return None
        return Path.from_raw(kind, m[0]), m.end()

    return parse


# path-absolute = "/" [ segment-nz *( "/" segment ) ]
_path_absolute: Parser[Path] = _path(PATH_ABSOLUTE_PAT, PathKind.ABSOLUTE)

# path-noscheme = segment-nz-nc *( "/" segment )
_path_noscheme: Parser[Path] = _path(PATH_NOSCHEME_PAT, PathKind.NOSCHEME)

# path-rootless = segment-nz *( "/" segment )
_path_rootless: Parser[Path] = _path(PATH_ROOTLESS_PAT, PathKind.ROOTLESS)


# path-abempty = *( "/" segment )
def _path_abempty(data: str, pos: int) -> tuple[Path, int]:
    """A zero-length path-abempty is reported as path-empty."""
    raw: str = _span(PATH_ABEMPTY_PAT, data, pos)
    if len(raw) == 0:
        return Path(kind=PathKind.EMPTY), pos
    return Path.from_raw(PathKind.ABEMPTY, raw), pos + len(raw)


# path-empty = 0<pchar>
def _path_empty(data: str, pos: int) -> tuple[Path, int] | None:
    if PCHAR_PAT.match(data, pos) is not None:
        return None
    return Path(kind=PathKind.EMPTY), pos


# "//" authority path-abempty
def _authority_and_path_abempty(data: str, pos: int) -> tuple[tuple[Authority | None, Path], int] | None:
    if not data.startswith("//", pos):
        return None
    parsed: tuple[Authority, int] | None = _authority(data, pos + len("//"))
    if parsed is None:
        return None
    authority, pos = parsed
    path, pos = _path_abempty(data, pos)
    return (authority, path), pos


def _no_authority(path_parser: Parser[Path]) -> Parser[tuple[Authority | None, Path]]:
    def parse(data: str, pos: int) -> tuple[tuple[Authority | None, Path], int] | None:
        parsed: tuple[Path, int] | None = path_parser(data, pos)
        if parsed is None:
            return None
        path, end = parsed
        return (None, path), end

    return parse


# hier-part = "//" authority path-abempty / path-absolute / path-rootless / path-empty
_hier_part: Parser[tuple[Authority | None, Path]] = _first_of(
    _authority_and_path_abempty,
    _no_authority(_path_absolute),
    _no_authority(_path_rootless),
    _no_authority(_path_empty),
)

# relative-part = "//" authority path-abempty / path-absolute / path-noscheme / path-empty
_relative_part: Parser[tuple[Authority | None, Path]] = _first_of(
    _authority_and_path_abempty,
    _no_authority(_path_absolute),
    _no_authority(_path_noscheme),
    _no_authority(_path_empty),
)


def _query_parameters(raw: str) -> tuple[tuple[str, tuple[str, ...]], ...]:
    """query-params = query-pair *( ( ";" / "&" ) query-pair )
    query-pair = key [ "=" value *( "," value ) ]
    Empty pairs are skipped. A pair without "=" is a key without values.
    """
    parameters: list[tuple[str, tuple[str, ...]]] = []
    for pair in QUERY_PAIR_SEP_PAT.split(raw):
        if len(pair) == 0:
            continue
        key, equals, values = pair.partition("=")
        parameters.append((key, tuple(values.split(",")) if len(equals) > 0 else ()))
    return tuple(parameters)


# query = *( pchar / "/" / "?" )
def _query(data: str, pos: int) -> tuple[Query, int]:
    raw: str = _span(QUERY_PAT, data, pos)
    return Query(raw=raw, parameters=_query_parameters(raw)), pos + len(raw)


# fragment = *( pchar / "/" / "?" )
def _fragment(data: str, pos: int) -> tuple[Fragment, int]:
    raw: str = _span(FRAGMENT_PAT, data, pos)
    return Fragment(raw=raw), pos + len(raw)


# URI = scheme ":" hier-part [ "?" query ] [ "#" fragment ]
def _uri(data: str, pos: int) -> tuple[URI, int] | None:
    return _uri_with(data, pos, allow_fragment=True)


# absolute-URI = scheme ":" hier-part [ "?" query ]
def _absolute_uri(data: str, pos: int) -> tuple[URI, int] | None:
    return _uri_with(data, pos, allow_fragment=False)


def _uri_with(data: str, pos: int, allow_fragment: bool) -> tuple[URI, int] | None:
    start: int = pos
    parsed_scheme: tuple[Scheme, int] | None = _scheme(data, pos)
    if parsed_scheme is None:
        return None
    scheme, pos = parsed_scheme
    if not data.startswith(":", pos):
        return None
    parsed_hier_part: tuple[tuple[Authority | None, Path], int] | None = _hier_part(data, pos + 1)
    if parsed_hier_part is None:
        return None
    (authority, path), pos = parsed_hier_part
    query, pos = _optional("?", _query, data, pos)
    fragment: Fragment | None = None
    if allow_fragment:
        fragment, pos = _optional("#", _fragment, data, pos)
    return (
        URI(raw=data[start:pos], scheme=scheme, authority=authority, path=path, query=query, fragment=fragment),
        pos,
    )


# relative-ref = relative-part [ "?" query ] [ "#" fragment ]
def _relative_ref(data: str, pos: int) -> tuple[URIRelativeReference, int] | None:
    start: int = pos
    parsed_relative_part: tuple[tuple[Authority | None, Path], int] | None = _relative_part(data, pos)
    if parsed_relative_part is None:
        return None
    (authority, path), pos = parsed_relative_part
    query, pos = _optional("?", _query, data, pos)
    fragment, pos = _optional("#", _fragment, data, pos)
    return (
        URIRelativeReference(raw=data[start:pos], authority=authority, path=path, query=query, fragment=fragment),
        pos,
    )


def _parse(data: str, parser: Parser[T], production: str) -> T:
    parsed: tuple[T, int] | None = parser(data, 0)
    if parsed is None or parsed[1] != len(data):
        logger.debug("Failed to parse %s: %r", production, data)
        raise ParseError(production, data)
    return parsed[0]


def parse_uri(data: str) -> URI:
    """RFC 3986-compliant URI parser.
    If you want to parse something like "http://example.org/path?query#fragment", this is the function to use.
    """
    return _parse(data, _uri, "URI")


def parse_absolute_uri(data: str) -> URI:
    """RFC 3986-compliant absolute-URI parser. Same as parse_uri, except that a fragment is rejected."""
    return _parse(data, _absolute_uri, "absolute-URI")


def parse_relative_ref(data: str) -> URIRelativeReference:
    """RFC 3986-compliant relative-ref parser.
    If you want to parse a reference without a scheme (e.g. "//example.org/path?query#fragment"), this is the function to use.
    """
    return _parse(data, _relative_ref, "relative-ref")


parse_relative_reference = parse_relative_ref


def parse_uri_reference(data: str) -> URIReference:
    """RFC 3986-compliant URI-Reference parser.
    Only use this when you don't know whether you want to parse a URI or a relative-ref.
    """
    try:
        return URIReference(target=parse_uri(data))
    except ParseError:
        pass
    try:
        return URIReference(target=parse_relative_ref(data))
    except ParseError:
        pass
    raise ParseError("URI-reference", data)


# path = path-abempty / path-absolute / path-noscheme / path-rootless / path-empty
# path-rootless accepts every path-noscheme, so a lone path is never classified as path-noscheme.
_PATH_ALTERNATIVES: tuple[Parser[Path], ...] = (_path_absolute, _path_rootless, _path_empty, _path_abempty)


def parse_path(data: str) -> Path:
    """RFC 3986-compliant path parser, e.g. parse_path("/a/b").segments == ("a", "b")"""
    for alternative in _PATH_ALTERNATIVES:
        parsed: tuple[Path, int] | None = alternative(data, 0)
        if parsed is not None and parsed[1] == len(data):
            return parsed[0]
    logger.debug("Failed to parse %s: %r", "path", data)
    raise ParseError("path", data)
