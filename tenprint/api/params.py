"""Parameter validation schemas for API requests."""

from collections.abc import Mapping
from typing import Any

from pydantic import Field

from tenprint.pattern.config import ConfigResult, PatternConfig, validate_config


class SvgQueryParams(PatternConfig):
    """Query parameters for ``/svg``: the pattern config plus canvas size.

    Unlike the pattern fields, width and height have no defaults.
    """

    width: int = Field(gt=0)
    height: int = Field(gt=0)


def validate_query(query: Mapping[str, Any]) -> ConfigResult:
    """Validate an ``/svg`` query mapping.

    Repeated keys keep their last value.
    """
    return validate_config(dict(query), SvgQueryParams)
