"""Tests for canonical URLs and redirect decisions."""

from urllib.parse import parse_qsl, urlsplit

import pytest

from tenprint.api.canonical import (
    Redirect,
    build_image_url,
    canonical_query,
    format_number,
    normalise_url,
    serialise_params,
    value_to_string,
)
from tenprint.api.params import SvgQueryParams, validate_query
from tenprint.colour.spaces import rgb

BASE_URL = "https://10print.xyz/svg"


def _params(**query: str) -> SvgQueryParams:
    result = validate_query(query)
    assert result.ok, result
    return result.value


@pytest.fixture
def full_params() -> SvgQueryParams:
    """Parameters with every key given explicitly."""
    return _params(
        width="100",
        height="50",
        gridSize="20",
        lineThickness="2",
        firstColour="#3B82F6",
        secondColour="#EC4899",
        seed="123",
    )


class TestFormatNumber:
    """Test JavaScript-compatible number strings."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (20, "20"),
            (123.0, "123"),
            (-0.0, "0"),
            (0.5, "0.5"),
            (0.123456789, "0.123456789"),
            (1e-05, "0.00001"),
            (0.0001234, "0.0001234"),
            (1.5e-07, "1.5e-7"),
            (1e16, "10000000000000000"),
            (1e21, "1e+21"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        """Test numbers are written the way browsers write them."""
        assert format_number(value) == expected

    def test_value_to_string(self) -> None:
        """Test colours, booleans and strings are stringified."""
        assert value_to_string(rgb(1, 0, 0)) == "#FF0000"
        assert value_to_string(True) == "true"
        assert value_to_string(15) == "15"
        assert value_to_string("abc") == "abc"


class TestSerialisation:
    """Test canonical query serialisation."""

    def test_sorted_keys(self, full_params: SvgQueryParams) -> None:
        """Test every parameter is written, sorted by name."""
        keys = [key for key, _ in serialise_params(full_params)]
        assert keys == [
            "firstColour",
            "gridSize",
            "height",
            "lineThickness",
            "secondColour",
            "seed",
            "width",
        ]

    def test_canonical_query(self, full_params: SvgQueryParams) -> None:
        """Test the encoded query string."""
        assert canonical_query(full_params) == (
            "firstColour=%233B82F6&gridSize=20&height=50&lineThickness=2"
            "&secondColour=%23EC4899&seed=123&width=100"
        )


class TestNormaliseUrl:
    """Test redirect decisions."""

    def test_canonical_url_not_redirected(self, full_params: SvgQueryParams) -> None:
        """Test an already canonical URL is served as is."""
        url = f"{BASE_URL}?{canonical_query(full_params)}"
        assert normalise_url(url, full_params) is None

    def test_reordered_keys_redirect_permanently(
        self, full_params: SvgQueryParams
    ) -> None:
        """Test a complete but unsorted query gets a 301."""
        url = (
            f"{BASE_URL}?width=100&height=50&seed=123&gridSize=20&lineThickness=2"
            "&firstColour=%233B82F6&secondColour=%23EC4899"
        )
        redirect = normalise_url(url, full_params)

        assert redirect is not None
        assert redirect.status_code == 301
        assert redirect.permanent
        assert redirect.max_age == 3600
        assert redirect.location == f"{BASE_URL}?{canonical_query(full_params)}"

    def test_missing_keys_redirect_temporarily(self) -> None:
        """Test a partial query gets a 302 with the defaults filled in."""
        params = _params(width="100", height="100")
        redirect = normalise_url(f"{BASE_URL}?width=100&height=100", params)

        assert redirect is not None
        assert redirect.status_code == 302
        assert not redirect.permanent
        assert redirect.cache_control == "public, max-age=60"

        query = dict(parse_qsl(urlsplit(redirect.location).query))
        assert query["width"] == "100"
        assert query["height"] == "100"
        assert query["gridSize"] == "20"
        assert "seed" in query

    def test_blank_value_counts_as_missing(self, full_params: SvgQueryParams) -> None:
        """Test a key present with an empty value still gets a 302."""
        url = (
            f"{BASE_URL}?firstColour=%233B82F6&gridSize=&height=50&lineThickness=2"
            "&secondColour=%23EC4899&seed=123&width=100"
        )

        redirect = normalise_url(url, full_params)
        assert redirect is not None
        assert redirect.status_code == 302

    def test_unknown_keys_dropped(self, full_params: SvgQueryParams) -> None:
        """Test extra parameters are removed with a 301."""
        url = f"{BASE_URL}?{canonical_query(full_params)}&utm_source=feed"
        redirect = normalise_url(url, full_params)

        assert redirect is not None
        assert redirect.status_code == 301
        assert "utm_source" not in redirect.location

    def test_fragment_dropped(self, full_params: SvgQueryParams) -> None:
        """Test the canonical URL keeps scheme, host and path only."""
        url = f"http://localhost:8000/svg?{canonical_query(full_params)}#top"
        redirect = normalise_url(url, full_params)

        assert redirect is not None
        assert redirect.location.startswith("http://localhost:8000/svg?")
        assert "#" not in redirect.location

    def test_lowercase_colour_normalised(self) -> None:
        """Test colour strings are rewritten in canonical form."""
        params = _params(width="10", height="10", firstColour="#ff0000")
        redirect = normalise_url(f"{BASE_URL}?width=10&height=10&firstColour=%23ff0000", params)

        assert redirect is not None
        assert "firstColour=%23FF0000" in redirect.location

    def test_redirect_target_is_canonical(self) -> None:
        """Test following a redirect never redirects again."""
        params = _params(width="64", height="32", lineThickness="4")
        redirect = normalise_url(f"{BASE_URL}?height=32&width=64&lineThickness=4", params)
        assert redirect is not None

        target_params = _params(**dict(parse_qsl(urlsplit(redirect.location).query)))
        assert normalise_url(redirect.location, target_params) is None

    def test_custom_max_ages(self) -> None:
        """Test cache lifetimes can be overridden."""
        params = _params(width="10", height="10")
        redirect = normalise_url(
            f"{BASE_URL}?width=10&height=10",
            params,
            permanent_max_age=86400,
            temporary_max_age=5,
        )

        assert redirect is not None
        assert redirect.max_age == 5


def test_redirect_headers() -> None:
    """Test Redirect exposes Location and Cache-Control."""
    redirect = Redirect(location="https://x.test/svg?a=1", status_code=301, max_age=3600)

    assert redirect.headers() == {
        "Location": "https://x.test/svg?a=1",
        "Cache-Control": "public, max-age=3600",
    }


def test_build_image_url_partial() -> None:
    """Test image URLs from a partial mapping are sorted and encoded."""
    url = build_image_url(BASE_URL, {"seed": 1.0, "gridSize": 10, "firstColour": "#000000"})
    assert url == f"{BASE_URL}?firstColour=%23000000&gridSize=10&seed=1"


def test_build_image_url_full(full_params: SvgQueryParams) -> None:
    """Test a complete mapping gives the canonical URL."""
    url = build_image_url(BASE_URL, full_params.to_wire())
    assert url == f"{BASE_URL}?{canonical_query(full_params)}"
    assert normalise_url(url, full_params) is None
