"""Pattern parameter schema, defaults and validation."""

import random
from dataclasses import dataclass
from typing import Annotated, Any, Literal

from coloraide import Color
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    ValidationError,
    model_validator,
)
from pydantic_core import PydanticCustomError

from tenprint.colour.spaces import INVALID_COLOUR, coerce_colour, colour_to_string, rgb

DEFAULT_GRID_SIZE = 20
DEFAULT_LINE_THICKNESS = 2
DEFAULT_FIRST_COLOUR = rgb(0.23, 0.51, 0.965)  # Blue (#3B82F6)
DEFAULT_SECOND_COLOUR = rgb(0.925, 0.282, 0.6)  # Pink (#EC4899)


def _validate_colour(value: Any) -> Color:
    try:
        return coerce_colour(value)
    except ValueError:
        raise PydanticCustomError("invalid_colour", INVALID_COLOUR) from None


ColourValue = Annotated[
    Color,
    PlainValidator(_validate_colour),
    PlainSerializer(colour_to_string, return_type=str),
]


class PatternConfig(BaseModel):
    """Complete parameter set for one pattern.

    Every field has a default, so validating an empty mapping gives a usable
    configuration. Wire names (aliases) are camelCase.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    grid_size: int = Field(default=DEFAULT_GRID_SIZE, ge=10, le=100, alias="gridSize")
    line_thickness: int = Field(
        default=DEFAULT_LINE_THICKNESS, ge=1, le=5, alias="lineThickness"
    )
    first_colour: ColourValue = Field(
        default_factory=DEFAULT_FIRST_COLOUR.clone, alias="firstColour"
    )
    second_colour: ColourValue = Field(
        default_factory=DEFAULT_SECOND_COLOUR.clone, alias="secondColour"
    )
    seed: float = Field(default_factory=random.random, allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        """Treat empty strings and None as absent so defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None and v != ""}
        return data

    def to_wire(self) -> dict[str, Any]:
        """Field values keyed by wire name, unconverted."""
        return {
            (info.alias or name): getattr(self, name)
            for name, info in type(self).model_fields.items()
        }


@dataclass(frozen=True)
class FieldIssue:
    """One problem with one input field."""

    field: str
    message: str


@dataclass(frozen=True)
class ValidConfig:
    """Successful validation."""

    value: PatternConfig
    ok: Literal[True] = True


@dataclass(frozen=True)
class InvalidConfig:
    """Failed validation, with every issue found."""

    issues: tuple[FieldIssue, ...] = ()
    ok: Literal[False] = False

    def as_report(self) -> dict[str, list[str]]:
        """Group issue messages by field name."""
        report: dict[str, list[str]] = {}
        for issue in self.issues:
            report.setdefault(issue.field, []).append(issue.message)
        return report


ConfigResult = ValidConfig | InvalidConfig


def validate_config(
    raw: Any, schema: type[PatternConfig] = PatternConfig
) -> ConfigResult:
    """Validate raw input against a pattern schema.

    Args:
        raw: None (treated as empty) or a mapping of wire names to strings,
            numbers or colour objects.
        schema: PatternConfig or a subclass extending it.

    Returns:
        ValidConfig with defaults filled in, or InvalidConfig listing one
        issue per invalid field.
    """
    if raw is None:
        raw = {}

    try:
        return ValidConfig(value=schema.model_validate(raw))
    except ValidationError as e:
        issues = tuple(
            FieldIssue(
                field=str(error["loc"][0]) if error["loc"] else "input",
                message=error["msg"],
            )
            for error in e.errors()
        )
        return InvalidConfig(issues=issues)
