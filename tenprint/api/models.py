"""API response models."""

from pydantic import BaseModel, ConfigDict, Field


class ValidationErrorResponse(BaseModel):
    """Body of a 400 response."""

    message: str = Field(description="Summary of the failure")
    errors: dict[str, list[str]] = Field(
        default_factory=dict, description="Messages per query parameter"
    )


class ColourPairResponse(BaseModel):
    """A generated pair of stroke colours as CSS strings."""

    model_config = ConfigDict(populate_by_name=True)

    first_colour: str = Field(alias="firstColour", description="Forward diagonal colour")
    second_colour: str = Field(
        alias="secondColour", description="Backward diagonal colour"
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Overall service status")
    version: str = Field(description="API version")
