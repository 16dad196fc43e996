"""End-to-end tests for the tenprint HTTP API.

The full app runs in-process behind TestClient, so redirects are followed
exactly as a browser or CDN would follow them.
Run with: pytest tests/integration/ -v
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from urllib.parse import parse_qsl, urlsplit

import pytest
import structlog
from fastapi.testclient import TestClient

from tenprint.api.gateway import create_app
from tenprint.config.loader import load_config
from tenprint.main import TenPrintServer

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a service configuration file."""
    path = tmp_path / "config.yaml"
    path.write_text(
        """
api:
  port: 8001
cache:
  svg_max_age: 600
  temporary_redirect_max_age: 10
logging:
  level: WARNING
  format: text
"""
    )
    return path


@pytest.fixture
def client(config_file: Path) -> TestClient:
    """Create a test client for an app built from the config file."""
    return TestClient(create_app(load_config(config_file)))


def test_partial_request_resolves_to_svg(client: TestClient) -> None:
    """Test a partial query is redirected once, then served."""
    response = client.get("/svg", params={"width": 50, "height": 40, "gridSize": 10})

    assert response.status_code == 200
    assert len(response.history) == 1
    assert response.history[0].status_code == 302
    assert response.history[0].headers["cache-control"] == "public, max-age=10"
    assert response.headers["cache-control"] == "public, max-age=600"

    root = ET.fromstring(response.text)
    assert root.get("viewBox") == "0 0 50 40"
    # 10 cells across 50 units: 5-unit cells, 11 x 9 with overscan
    assert len(list(root.iter(f"{SVG_NS}line"))) == 11 * 9


def test_resolved_url_is_stable(client: TestClient) -> None:
    """Test the final URL serves the same SVG directly with no redirect."""
    first = client.get("/svg", params={"width": 30, "height": 30})
    second = client.get(str(first.url))

    assert second.status_code == 200
    assert second.history == []
    assert second.text == first.text


def test_complete_request_redirects_permanently(client: TestClient) -> None:
    """Test an unsorted but complete query takes a single 301."""
    response = client.get(
        "/svg",
        params={
            "width": 20,
            "seed": 5,
            "height": 20,
            "secondColour": "hotpink",
            "lineThickness": 1,
            "gridSize": 10,
            "firstColour": "oklch(0.6 0.1 250)",
        },
    )

    assert response.status_code == 200
    assert [r.status_code for r in response.history] == [301]

    query = dict(parse_qsl(urlsplit(str(response.url)).query))
    assert query["secondColour"] == "#FF69B4"
    assert query["seed"] == "5"


def test_generated_colours_render(client: TestClient) -> None:
    """Test colours from /colours can be used as /svg parameters."""
    pair = client.get("/colours", params={"seed": "integration"}).json()
    response = client.get(
        "/svg",
        params={
            "width": 10,
            "height": 10,
            "firstColour": pair["firstColour"],
            "secondColour": pair["secondColour"],
        },
    )

    assert response.status_code == 200
    strokes = {line.get("stroke") for line in ET.fromstring(response.text).iter(f"{SVG_NS}line")}
    assert strokes <= {pair["firstColour"], pair["secondColour"]}


def test_server_builds_app_from_config(config_file: Path) -> None:
    """Test TenPrintServer loads config and exposes the app."""
    try:
        server = TenPrintServer(config_file)

        assert server.config.api.port == 8001
        response = TestClient(server.app).get("/health")
        assert response.status_code == 200
    finally:
        structlog.reset_defaults()
