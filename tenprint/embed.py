"""HTML snippet that sets a page background to a generated pattern."""

import json

from tenprint.pattern.config import PatternConfig

DEFAULT_SCRIPT_URL = "https://10print.xyz/background-element.js"


def embed_options(config: PatternConfig, include_seed: bool = False) -> dict[str, object]:
    """Options object passed to the browser-side ``TENPRINT`` function.

    Colours are written as CSS colour functions so any browser can read them.
    The seed is left out by default, giving each visitor a fresh pattern.
    """
    options: dict[str, object] = {
        "gridSize": config.grid_size,
        "lineThickness": config.line_thickness,
        "firstColour": config.first_colour.to_string(),
        "secondColour": config.second_colour.to_string(),
    }
    if include_seed:
        options["seed"] = config.seed
    return options


def generate_embed_code(
    config: PatternConfig,
    include_seed: bool = False,
    script_url: str = DEFAULT_SCRIPT_URL,
) -> str:
    """Build a ``<script type="module">`` snippet applying the pattern to ``document.body``."""
    options = json.dumps(embed_options(config, include_seed), indent=2)
    indented = "\n".join(f"  {line}" for line in options.splitlines())

    return (
        '<script type="module">\n'
        f'  import {{ TENPRINT }} from "{script_url}";\n'
        "\n"
        f"  TENPRINT(document.body, {indented.lstrip()});\n"
        "</script>"
    )
