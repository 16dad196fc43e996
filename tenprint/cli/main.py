"""CLI tool for rendering patterns and talking to a tenprint server."""

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
import requests

from tenprint.api.canonical import build_image_url, canonical_query
from tenprint.api.params import SvgQueryParams
from tenprint.colour.harmony import generate_pair
from tenprint.colour.spaces import colour_to_string, parse_colour
from tenprint.embed import DEFAULT_SCRIPT_URL, generate_embed_code
from tenprint.main import main as tenprint_main
from tenprint.pattern.config import InvalidConfig, PatternConfig, validate_config
from tenprint.pattern.svg import render_svg


def pattern_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the shared pattern options to a command."""
    options = [
        click.option("--grid-size", type=str, help="Cells along the longer side (10-100)"),
        click.option("--line-thickness", type=str, help="Stroke width (1-5)"),
        click.option("--first-colour", help="CSS colour for forward diagonals"),
        click.option("--second-colour", help="CSS colour for backward diagonals"),
        click.option("--seed", type=str, help="Pattern seed (random if omitted)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _raw_params(**values: Any) -> dict[str, Any]:
    """Map CLI option values to wire names, dropping unset ones."""
    names = {
        "grid_size": "gridSize",
        "line_thickness": "lineThickness",
        "first_colour": "firstColour",
        "second_colour": "secondColour",
        "seed": "seed",
        "width": "width",
        "height": "height",
    }
    return {names[key]: value for key, value in values.items() if value is not None}


def _validated(raw: dict[str, Any], schema: type[PatternConfig]) -> PatternConfig:
    """Validate or exit with one line per issue."""
    result = validate_config(raw, schema)
    if isinstance(result, InvalidConfig):
        for issue in result.issues:
            click.echo(f"Invalid {issue.field}: {issue.message}", err=True)
        sys.exit(1)
    return result.value


@click.group()
def cli() -> None:
    """tenprint: seeded 10 PRINT maze patterns as SVG."""
    pass


@cli.command()
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file",
)
def serve(config: Path | None) -> None:
    """Start the tenprint API server."""
    click.echo(f"Starting tenprint with config: {config or 'defaults'}")
    try:
        asyncio.run(tenprint_main(config))
    except KeyboardInterrupt:
        click.echo("\nShutdown requested")
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--width", type=str, required=True, help="Canvas width")
@click.option("--height", type=str, required=True, help="Canvas height")
@pattern_options
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    help="Write the SVG to a file instead of stdout",
)
def render(output: Path | None, **values: Any) -> None:
    """Render a pattern locally."""
    params = _validated(_raw_params(**values), SvgQueryParams)
    svg = render_svg(params, params.width, params.height)

    if output:
        output.write_text(svg)
        click.echo(f"SVG saved to: {output}")
    else:
        click.echo(svg)


@cli.command()
@click.option("--seed", help="Seed for a reproducible pair")
@click.option("--background", help="CSS background colour the strokes sit on")
def colours(seed: str | None, background: str | None) -> None:
    """Generate a harmonious pair of stroke colours."""
    background_colour = None
    if background:
        try:
            background_colour = parse_colour(background)
        except ValueError as e:
            click.echo(f"Invalid background: {e}", err=True)
            sys.exit(1)

    pair = generate_pair(seed=seed, background=background_colour)
    click.echo(f"firstColour: {colour_to_string(pair.first_colour)}")
    click.echo(f"secondColour: {colour_to_string(pair.second_colour)}")


@cli.command()
@click.option(
    "--base-url",
    default="http://localhost:8000/svg",
    help="URL of the /svg endpoint",
)
@click.option("--width", type=str, required=True, help="Canvas width")
@click.option("--height", type=str, required=True, help="Canvas height")
@pattern_options
def url(base_url: str, **values: Any) -> None:
    """Print the canonical /svg URL for a pattern."""
    params = _validated(_raw_params(**values), SvgQueryParams)
    click.echo(build_image_url(base_url, params.to_wire()))


@cli.command()
@pattern_options
@click.option("--include-seed", is_flag=True, help="Pin the seed in the snippet")
@click.option(
    "--script-url",
    default=DEFAULT_SCRIPT_URL,
    help="URL of the browser background script",
)
def embed(include_seed: bool, script_url: str, **values: Any) -> None:
    """Print an HTML snippet that applies the pattern to a page background."""
    config = _validated(_raw_params(**values), PatternConfig)
    click.echo(generate_embed_code(config, include_seed=include_seed, script_url=script_url))


@cli.command()
@click.option("--host", default="localhost", help="API server host")
@click.option("--port", default=8000, help="API server port")
@click.option("--width", type=str, required=True, help="Canvas width")
@click.option("--height", type=str, required=True, help="Canvas height")
@pattern_options
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    help="Save the SVG to a file",
)
def fetch(host: str, port: int, output: Path | None, **values: Any) -> None:
    """Fetch a pattern from a running server.

    Canonical redirects are followed; the final URL is reported so it can be
    reused as a stable, cacheable link.
    """
    params = _validated(_raw_params(**values), SvgQueryParams)
    url = f"http://{host}:{port}/svg?{canonical_query(params)}"

    try:
        response = requests.get(url, timeout=10)
        if response.status_code == 400:
            errors = response.json().get("errors", {})
            for field, messages in errors.items():
                for message in messages:
                    click.echo(f"Invalid {field}: {message}", err=True)
            sys.exit(1)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        click.echo(f"Error fetching SVG: {e}", err=True)
        sys.exit(1)

    if output:
        output.write_text(response.text)
        click.echo(f"SVG saved to: {output}")
        click.echo(f"URL: {response.url}")
    else:
        click.echo(response.text)


if __name__ == "__main__":
    cli()
