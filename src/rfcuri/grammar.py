"""rfcuri.grammar
Character classes and RFC 3986 productions, expressed as regular expressions.
"""

import re
import string

# Each of these ABNF rules is from RFC 3986 or 5234.

# ALPHA = %x41-5A / %x61-7A
_ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
_DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = rf"(?:{_DIGIT}|[A-Fa-f])"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: str = rf"(?:{_ALPHA}|{_DIGIT}|[-._~])"

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED: str = rf"%{_HEXDIG}{_HEXDIG}"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: str = r"[!$&'()*+,;=]"

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
_PCHAR: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|[:@])"

# query = *( pchar / "/" / "?" )
_QUERY: str = rf"(?:{_PCHAR}|[/?])*"

# fragment = *( pchar / "/" / "?" )
_FRAGMENT: str = rf"(?:{_PCHAR}|[/?])*"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME: str = rf"{_ALPHA}(?:{_ALPHA}|{_DIGIT}|[+\-.])*"

# segment = *pchar
_SEGMENT: str = rf"{_PCHAR}*"

# segment-nz = 1*pchar
_SEGMENT_NZ: str = rf"{_PCHAR}+"

# segment-nz-nc = 1*( unreserved / pct-encoded / sub-delims / "@" )
_SEGMENT_NZ_NC: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|@)+"

# path-abempty = *( "/" segment )
_PATH_ABEMPTY: str = rf"(?:/{_SEGMENT})*"

# path-absolute = "/" [ segment-nz *( "/" segment ) ]
_PATH_ABSOLUTE: str = rf"/(?:{_SEGMENT_NZ}(?:/{_SEGMENT})*)?"

# path-noscheme = segment-nz-nc *( "/" segment )
_PATH_NOSCHEME: str = rf"{_SEGMENT_NZ_NC}(?:/{_SEGMENT})*"

# path-rootless = segment-nz *( "/" segment )
_PATH_ROOTLESS: str = rf"{_SEGMENT_NZ}(?:/{_SEGMENT})*"

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
_USERINFO: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|:)*"

# Secondary split of a userinfo span:
# username = 1*( unreserved / pct-encoded / sub-delims )
# password = *( unreserved / pct-encoded / sub-delims / ":" )
_USERNAME: str = rf"(?P<username>(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS})+)"
_PASSWORD: str = rf"(?P<password>(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|:)*)"
_USERINFO_SPLIT: str = rf"{_USERNAME}(?::{_PASSWORD})?"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = rf"(?:25[0-5]|2[0-4]{_DIGIT}|1{_DIGIT}{{2}}|[1-9]{_DIGIT}|{_DIGIT})"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
_IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"

# h16 = 1*4HEXDIG
_H16: str = rf"(?:{_HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{_IPV4ADDRESS})"

# IPv6address =                                      6( h16 ":" ) ls32
#                       /                       "::" 5( h16 ":" ) ls32
#                       / [               h16 ] "::" 4( h16 ":" ) ls32
#                       / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#                       / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#                       / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#                       / [ *4( h16 ":" ) h16 ] "::"              ls32
#                       / [ *5( h16 ":" ) h16 ] "::"              h16
#                       / [ *6( h16 ":" ) h16 ] "::"
_IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{_H16}:){{6}}{_LS32}",
                                         rf"::(?:{_H16}:){{5}}{_LS32}",
                              rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
            rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
            rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
            rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
        )
    )
    + ")"
)

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
_IPVFUTURE: str = rf"v{_HEXDIG}+\.(?:{_UNRESERVED}|{_SUB_DELIMS}|:)+"

# reg-name = *( unreserved / pct-encoded / sub-delims )
_REG_NAME: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS})*"

# port = 1*DIGIT
_PORT: str = rf"{_DIGIT}+"

# The IP-literal alternatives are separate patterns so that they can be tried in order.
# IP-literal = "[" ( IPv6address / IPvFuture ) "]"
IPV6_LITERAL_PAT: re.Pattern[str] = re.compile(rf"\[(?P<address>{_IPV6ADDRESS})\]")
IPVFUTURE_LITERAL_PAT: re.Pattern[str] = re.compile(rf"\[(?P<address>{_IPVFUTURE})\]")

IPV4ADDRESS_PAT: re.Pattern[str] = re.compile(_IPV4ADDRESS)
REG_NAME_PAT: re.Pattern[str] = re.compile(_REG_NAME)
PORT_PAT: re.Pattern[str] = re.compile(_PORT)
SCHEME_PAT: re.Pattern[str] = re.compile(_SCHEME)
USERINFO_PAT: re.Pattern[str] = re.compile(_USERINFO)
USERINFO_SPLIT_PAT: re.Pattern[str] = re.compile(_USERINFO_SPLIT)
PCHAR_PAT: re.Pattern[str] = re.compile(_PCHAR)

# The capturing group makes re.split() keep the runs of pct-encoded triples.
PCT_ENCODED_RUN_PAT: re.Pattern[str] = re.compile(rf"((?:{_PCT_ENCODED})+)")

PATH_ABEMPTY_PAT: re.Pattern[str] = re.compile(_PATH_ABEMPTY)
PATH_ABSOLUTE_PAT: re.Pattern[str] = re.compile(_PATH_ABSOLUTE)
PATH_NOSCHEME_PAT: re.Pattern[str] = re.compile(_PATH_NOSCHEME)
PATH_ROOTLESS_PAT: re.Pattern[str] = re.compile(_PATH_ROOTLESS)

QUERY_PAT: re.Pattern[str] = re.compile(_QUERY)
# query-params = query-pair *( ( ";" / "&" ) query-pair )
QUERY_PAIR_SEP_PAT: re.Pattern[str] = re.compile(r"[&;]")
FRAGMENT_PAT: re.Pattern[str] = re.compile(_FRAGMENT)


# Single-character predicates. pct-encoded is a triple, so it is never a single character.

_ALPHA_CHARS: frozenset[str] = frozenset(string.ascii_letters)
_DIGIT_CHARS: frozenset[str] = frozenset(string.digits)
_HEXDIG_CHARS: frozenset[str] = frozenset(string.hexdigits)
_UNRESERVED_CHARS: frozenset[str] = _ALPHA_CHARS | _DIGIT_CHARS | frozenset("-._~")
_GEN_DELIM_CHARS: frozenset[str] = frozenset(":/?#[]@")
_SUB_DELIM_CHARS: frozenset[str] = frozenset("!$&'()*+,;=")
_PCHAR_CHARS: frozenset[str] = _UNRESERVED_CHARS | _SUB_DELIM_CHARS | frozenset(":@")


def is_alpha(c: str) -> bool:
    return c in _ALPHA_CHARS


def is_digit(c: str) -> bool:
    return c in _DIGIT_CHARS


def is_hexdig(c: str) -> bool:
    return c in _HEXDIG_CHARS


def is_unreserved(c: str) -> bool:
    return c in _UNRESERVED_CHARS


def is_gen_delim(c: str) -> bool:
    return c in _GEN_DELIM_CHARS


def is_sub_delim(c: str) -> bool:
    return c in _SUB_DELIM_CHARS


def is_reserved(c: str) -> bool:
    """reserved = gen-delims / sub-delims"""
    return is_gen_delim(c) or is_sub_delim(c)


def is_pchar(c: str) -> bool:
    """True for the single characters allowed in a path segment (the pct-encoded triple aside)."""
    return c in _PCHAR_CHARS
