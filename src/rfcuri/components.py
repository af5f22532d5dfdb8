"""rfcuri.components
The pieces a URI is made of, each as a parsed (immutable, raw text) value and a builder (mutable, decoded) counterpart.
"""

import dataclasses
import enum
import ipaddress

from typing import Self

from .codec import decode, encode


def _decode(text: str) -> str:
    # Octets that are not valid UTF-8 survive as surrogates and re-encode to the same triples.
    return decode(text, errors="surrogateescape")


class SchemeKind(enum.Enum):
    HTTP = "http"
    HTTPS = "https"
    OTHER = "other"


@dataclasses.dataclass(frozen=True)
class Scheme:
    raw: str
    kind: SchemeKind

    def __str__(self: Self) -> str:
        return self.raw

    def to_builder(self: Self) -> "SchemeBuilder":
        if self.kind is SchemeKind.OTHER:
            return SchemeBuilder(kind=self.kind, name=self.raw)
        return SchemeBuilder(kind=self.kind, name=self.kind.value)


@dataclasses.dataclass
class SchemeBuilder:
    kind: SchemeKind = SchemeKind.OTHER
    name: str = "scheme"

    def __str__(self: Self) -> str:
        if self.kind is SchemeKind.OTHER:
            return self.name
        return self.kind.value


@dataclasses.dataclass(frozen=True)
class UserInfo:
    """userinfo, split into username and password when the span allows it.
    An unparsed userinfo (empty, or starting with ":") has neither.
    """

    raw: str
    username: str | None = None
    password: str | None = None

    @property
    def parsed(self: Self) -> bool:
        return self.username is not None

    def __str__(self: Self) -> str:
        return self.raw

    def to_builder(self: Self) -> "UserInfoBuilder":
        if self.username is None:
            return UserInfoBuilder(username=_decode(self.raw))
        return UserInfoBuilder(
            username=_decode(self.username),
            password=_decode(self.password) if self.password is not None else None,
        )


@dataclasses.dataclass
class UserInfoBuilder:
    username: str = ""
    password: str | None = None

    def __str__(self: Self) -> str:
        if self.password is None:
            return encode(self.username)
        return f"{encode(self.username)}:{encode(self.password)}"


class HostKind(enum.Enum):
    REG_NAME = "reg-name"
    IPV4 = "IPv4address"
    IPV6 = "IPv6address"
    IPVFUTURE = "IPvFuture"


@dataclasses.dataclass(frozen=True)
class HostInfo:
    """host = IP-literal / IPv4address / reg-name
    raw never includes the brackets of an IP-literal.
    """

    raw: str
    kind: HostKind
    address: ipaddress.IPv4Address | ipaddress.IPv6Address | None = None

    def __str__(self: Self) -> str:
        if self.kind in (HostKind.IPV6, HostKind.IPVFUTURE):
            return f"[{self.raw}]"
        return self.raw

    def to_builder(self: Self) -> "HostInfoBuilder":
        if self.kind in (HostKind.IPV4, HostKind.IPV6):
            return HostInfoBuilder(kind=self.kind, name="", address=self.address)
        return HostInfoBuilder(kind=self.kind, name=self.raw)


@dataclasses.dataclass
class HostInfoBuilder:
    """Addresses are rendered from address, names (reg-name, IPvFuture) from name."""

    kind: HostKind = HostKind.REG_NAME
    name: str = "localhost"
    address: ipaddress.IPv4Address | ipaddress.IPv6Address | None = None

    def _checked_address(self: Self, version: int) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
        if self.address is None or self.address.version != version:
            raise ValueError(f"{self.kind.value} host needs an IPv{version} address, got {self.address!r}")
        return self.address

    def __str__(self: Self) -> str:
        if self.kind is HostKind.IPV4:
            return str(self._checked_address(4))
        if self.kind is HostKind.IPV6:
            return f"[{self._checked_address(6)}]"
        if self.kind is HostKind.IPVFUTURE:
            return f"[{self.name}]"
        return self.name


@dataclasses.dataclass(frozen=True)
class Authority:
    """authority = [ userinfo "@" ] host [ ":" port ]"""

    raw: str
    userinfo: UserInfo | None
    host: HostInfo
    port: int | None

    def __str__(self: Self) -> str:
        return self.raw

    def to_builder(self: Self) -> "AuthorityBuilder":
        return AuthorityBuilder(
            userinfo=self.userinfo.to_builder() if self.userinfo is not None else None,
            host=self.host.to_builder(),
            port=self.port,
        )


@dataclasses.dataclass
class AuthorityBuilder:
    userinfo: UserInfoBuilder | None = None
    host: HostInfoBuilder = dataclasses.field(default_factory=lambda: HostInfoBuilder(name=""))
    port: int | None = None

    def __str__(self: Self) -> str:
        result: str = ""
        if self.userinfo is not None:
            result += f"{self.userinfo}@"
        result += str(self.host)
        if self.port is not None:
            result += f":{self.port}"
        return result


class PathKind(enum.Enum):
    EMPTY = "path-empty"
    ABEMPTY = "path-abempty"
    ABSOLUTE = "path-absolute"
    NOSCHEME = "path-noscheme"
    ROOTLESS = "path-rootless"


@dataclasses.dataclass(frozen=True)
class Path:
    """A path and its segments. Segment boundaries are exactly the "/" characters of raw."""

    kind: PathKind
    raw: str = ""
    segments: tuple[str, ...] = ()

    @classmethod
    def from_raw(cls, kind: PathKind, raw: str) -> Self:
        if kind is PathKind.EMPTY:
            return cls(kind=kind)
        if kind in (PathKind.ABEMPTY, PathKind.ABSOLUTE):
            return cls(kind=kind, raw=raw, segments=tuple(raw[1:].split("/")))
        return cls(kind=kind, raw=raw, segments=tuple(raw.split("/")))

    def __str__(self: Self) -> str:
        return self.raw

    def to_builder(self: Self) -> "PathBuilder":
        if self.kind is PathKind.EMPTY:
            return PathBuilder()
        segments: list[str] = [_decode(segment) for segment in self.segments]
        if self.kind in (PathKind.ABEMPTY, PathKind.ABSOLUTE):
            return PathBuilder(kind=PathBuilderKind.ABSOLUTE, segments=segments)
        return PathBuilder(kind=PathBuilderKind.RELATIVE, segments=segments)


class PathBuilderKind(enum.Enum):
    EMPTY = "empty"
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


@dataclasses.dataclass
class PathBuilder:
    kind: PathBuilderKind = PathBuilderKind.EMPTY
    segments: list[str] = dataclasses.field(default_factory=list)

    def _directory(self: Self) -> list[str]:
        # A trailing empty segment ("/dir/") only marks a directory.
        if len(self.segments) > 0 and self.segments[-1] == "":
            return self.segments[:-1]
        return list(self.segments)

    def parent(self: Self) -> Self:
        """The path without its last segment, e.g. the parent of "/a/b" and of "/a/b/" is "/a".
        The parent of an empty relative path is "..".
        """
        if self.kind is PathBuilderKind.EMPTY:
            return self.__class__()
        segments: list[str] = self._directory()
        if len(segments) > 0:
            segments.pop()
        elif self.kind is PathBuilderKind.RELATIVE:
            segments.append("..")
        return self.__class__(kind=self.kind, segments=segments)

    def child(self: Self, name: str) -> Self:
        kind: PathBuilderKind = self.kind
        if kind is PathBuilderKind.EMPTY:
            kind = PathBuilderKind.RELATIVE
        return self.__class__(kind=kind, segments=[*self._directory(), name])

    def __str__(self: Self) -> str:
        if self.kind is PathBuilderKind.EMPTY:
            return ""
        joined: str = "/".join(map(encode, self.segments))
        if self.kind is PathBuilderKind.ABSOLUTE:
            return f"/{joined}"
        if joined.startswith("/"):
            # A leading empty segment would make the path absolute.
            return f"./{joined}"
        return joined


@dataclasses.dataclass(frozen=True)
class Query:
    """The query and its parameters, split on "&" or ";", then on the first "=", then values on ","."""

    raw: str
    parameters: tuple[tuple[str, tuple[str, ...]], ...] = ()

    def __str__(self: Self) -> str:
        return self.raw

    def to_builder(self: Self) -> "QueryBuilder":
        return QueryBuilder(
            parameters=[(_decode(key), [_decode(value) for value in values]) for key, values in self.parameters]
        )


@dataclasses.dataclass
class QueryBuilder:
    parameters: list[tuple[str, list[str]]] = dataclasses.field(default_factory=list)

    def __str__(self: Self) -> str:
        pairs: list[str] = []
        for key, values in self.parameters:
            if len(values) == 0:
                pairs.append(encode(key))
            else:
                pairs.append(f"{encode(key)}={','.join(map(encode, values))}")
        return "&".join(pairs)


@dataclasses.dataclass(frozen=True)
class Fragment:
    raw: str

    def __str__(self: Self) -> str:
        return self.raw

    def to_builder(self: Self) -> "FragmentBuilder":
        return FragmentBuilder(text=_decode(self.raw))


@dataclasses.dataclass
class FragmentBuilder:
    text: str = ""

    def __str__(self: Self) -> str:
        return encode(self.text)
