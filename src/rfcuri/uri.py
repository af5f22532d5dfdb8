"""rfcuri.uri
URIs, relative references, and URI-references.
Values returned by the parse_* functions keep the text they were parsed from; their builders can be edited and re-serialized.
"""

import dataclasses

from typing import Self

from .components import (
    Authority,
    AuthorityBuilder,
    Fragment,
    FragmentBuilder,
    Path,
    PathBuilder,
    Query,
    QueryBuilder,
    Scheme,
    SchemeBuilder,
)


def _serialize(
    scheme: object | None,
    authority: object | None,
    path: PathBuilder,
    query: object | None,
    fragment: object | None,
) -> str:
    """Component recomposition from RFC 3986 section 5.3.
    The path is adjusted to the rules of section 3.3 so that it cannot be read back as part of the authority:
    with an authority it is empty or starts with "/", without one it never starts with "//".
    """
    result: str = ""
    if scheme is not None:
        result += f"{scheme}:"
    path_text: str = str(path)
    if authority is not None:
        result += f"//{authority}"
        if len(path_text) > 0 and not path_text.startswith("/"):
            path_text = f"/{path_text}"
    elif path_text.startswith("//"):
        path_text = f"/.{path_text}"
    result += path_text
    if query is not None:
        result += f"?{query}"
    if fragment is not None:
        result += f"#{fragment}"
    return result


@dataclasses.dataclass(frozen=True)
class URI:
    """URI = scheme ":" hier-part [ "?" query ] [ "#" fragment ]
    You should not instantiate this directly. Instead use parse_uri or parse_uri_reference.
    """

    raw: str
    scheme: Scheme
    authority: Authority | None
    path: Path
    query: Query | None = None
    fragment: Fragment | None = None

    def __str__(self: Self) -> str:
        return self.raw

    def to_builder(self: Self) -> "URIBuilder":
        return URIBuilder(
            scheme=self.scheme.to_builder(),
            authority=self.authority.to_builder() if self.authority is not None else None,
            path=self.path.to_builder(),
            query=self.query.to_builder() if self.query is not None else None,
            fragment=self.fragment.to_builder() if self.fragment is not None else None,
        )


@dataclasses.dataclass
class URIBuilder:
    scheme: SchemeBuilder = dataclasses.field(default_factory=SchemeBuilder)
    authority: AuthorityBuilder | None = None
    path: PathBuilder = dataclasses.field(default_factory=PathBuilder)
    query: QueryBuilder | None = None
    fragment: FragmentBuilder | None = None

    def __str__(self: Self) -> str:
        return _serialize(self.scheme, self.authority, self.path, self.query, self.fragment)


@dataclasses.dataclass(frozen=True)
class URIRelativeReference:
    """relative-ref = relative-part [ "?" query ] [ "#" fragment ]"""

    raw: str
    authority: Authority | None
    path: Path
    query: Query | None = None
    fragment: Fragment | None = None

    def __str__(self: Self) -> str:
        return self.raw

    def to_builder(self: Self) -> "URIRelativeReferenceBuilder":
        return URIRelativeReferenceBuilder(
            authority=self.authority.to_builder() if self.authority is not None else None,
            path=self.path.to_builder(),
            query=self.query.to_builder() if self.query is not None else None,
            fragment=self.fragment.to_builder() if self.fragment is not None else None,
        )


@dataclasses.dataclass
class URIRelativeReferenceBuilder:
    authority: AuthorityBuilder | None = None
    path: PathBuilder = dataclasses.field(default_factory=PathBuilder)
    query: QueryBuilder | None = None
    fragment: FragmentBuilder | None = None

    def __str__(self: Self) -> str:
        return _serialize(None, self.authority, self.path, self.query, self.fragment)


@dataclasses.dataclass(frozen=True)
class URIReference:
    """URI-reference = URI / relative-ref"""

    target: URI | URIRelativeReference

    @property
    def is_relative(self: Self) -> bool:
        return isinstance(self.target, URIRelativeReference)

    @property
    def raw(self: Self) -> str:
        return self.target.raw

    def __str__(self: Self) -> str:
        return str(self.target)

    def to_builder(self: Self) -> "URIReferenceBuilder":
        return URIReferenceBuilder(target=self.target.to_builder())


@dataclasses.dataclass
class URIReferenceBuilder:
    target: URIBuilder | URIRelativeReferenceBuilder

    def __str__(self: Self) -> str:
        return str(self.target)
