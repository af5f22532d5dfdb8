__version__ = "0.1"

from .codec import decode, encode
from .components import Authority, AuthorityBuilder, Fragment, FragmentBuilder, HostInfo, HostInfoBuilder, HostKind, Path, PathBuilder, PathBuilderKind, PathKind, Query, QueryBuilder, Scheme, SchemeBuilder, SchemeKind, UserInfo, UserInfoBuilder
from .errors import DecodeError, ParseError
from .parse import parse_absolute_uri, parse_path, parse_relative_ref, parse_relative_reference, parse_uri, parse_uri_reference
from .uri import URI, URIBuilder, URIReference, URIReferenceBuilder, URIRelativeReference, URIRelativeReferenceBuilder
