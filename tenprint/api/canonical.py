"""Canonical query strings and redirect decisions for ``/svg``.

Responses are cached by full URL, query string included. Without a single
canonical form, the same SVG requested with parameters in a different order,
or with defaults left out, would be generated and cached several times. Every
request is therefore redirected to a URL carrying every parameter, sorted by
name, before any SVG is generated.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from http import HTTPStatus
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import structlog
from coloraide import Color

from tenprint.colour.spaces import colour_to_string
from tenprint.pattern.config import PatternConfig

logger = structlog.get_logger()

PERMANENT_MAX_AGE = 3600
TEMPORARY_MAX_AGE = 60


@dataclass(frozen=True)
class Redirect:
    """Redirect to the canonical URL.

    Attributes:
        location: Canonical URL.
        status_code: 301 when every parameter was supplied, 302 when any
            default was filled in.
        max_age: Cache lifetime in seconds.
    """

    location: str
    status_code: int
    max_age: int

    @property
    def permanent(self) -> bool:
        return self.status_code == HTTPStatus.MOVED_PERMANENTLY

    @property
    def cache_control(self) -> str:
        return f"public, max-age={self.max_age}"

    def headers(self) -> dict[str, str]:
        return {"Location": self.location, "Cache-Control": self.cache_control}


def format_number(value: float) -> str:
    """Format a number the way JavaScript's ``Number#toString`` does.

    Integral values drop the ``.0``; other values use the shortest string
    that round-trips, in exponent notation below 1e-6 and from 1e21 up.
    """
    if isinstance(value, int):
        return str(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{int(exponent):+d}"


def value_to_string(value: Any) -> str:
    """Canonical string for one parameter value."""
    if isinstance(value, Color):
        return colour_to_string(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def serialise_values(values: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Stringify a parameter mapping, sorted by key. None values are skipped."""
    return sorted(
        (key, value_to_string(value))
        for key, value in values.items()
        if value is not None
    )


def serialise_params(params: PatternConfig) -> list[tuple[str, str]]:
    """Every validated parameter as sorted ``(wire name, string)`` pairs."""
    return serialise_values(params.to_wire())


def canonical_query(params: PatternConfig) -> str:
    """URL-encoded canonical query string."""
    return urlencode(serialise_params(params))


def _supplied_keys(query: str) -> set[str]:
    # Blank values count as missing: the default was filled in for them.
    return {key for key, _ in parse_qsl(query)}


def normalise_url(
    original_url: str,
    params: PatternConfig,
    permanent_max_age: int = PERMANENT_MAX_AGE,
    temporary_max_age: int = TEMPORARY_MAX_AGE,
) -> Redirect | None:
    """Decide whether a request must be redirected to its canonical URL.

    The canonical URL keeps the scheme, host and path of the original and
    replaces the query with canonical_query(params). Unknown parameters are
    dropped.

    Args:
        original_url: Full request URL as received.
        params: Validated parameters, defaults included.
        permanent_max_age: Cache lifetime for 301 redirects.
        temporary_max_age: Cache lifetime for 302 redirects.

    Returns:
        None if the original URL is already canonical, otherwise a Redirect.
        The redirect is temporary when any parameter was defaulted, because
        defaults such as the random seed are not stable across requests.
    """
    parts = urlsplit(original_url)
    canonical_url = urlunsplit(
        (parts.scheme, parts.netloc, parts.path, canonical_query(params), "")
    )

    if original_url == canonical_url:
        return None

    all_keys_present = _supplied_keys(parts.query).issuperset(params.to_wire())

    if all_keys_present:
        redirect = Redirect(
            location=canonical_url,
            status_code=HTTPStatus.MOVED_PERMANENTLY,
            max_age=permanent_max_age,
        )
    else:
        redirect = Redirect(
            location=canonical_url,
            status_code=HTTPStatus.FOUND,
            max_age=temporary_max_age,
        )

    logger.debug(
        "canonical_redirect",
        status=int(redirect.status_code),
        original=original_url,
        location=canonical_url,
    )
    return redirect


def build_image_url(base_url: str, params: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> str:
    """Build an ``/svg`` URL from a possibly partial parameter mapping.

    Values are serialised and sorted the same way as the canonical query, so
    a complete mapping produces the canonical URL directly.
    """
    values = dict(params)
    parts = urlsplit(base_url)
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, urlencode(serialise_values(values)), "")
    )
