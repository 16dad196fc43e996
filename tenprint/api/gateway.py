"""FastAPI gateway for the tenprint HTTP API."""

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from tenprint.api.canonical import normalise_url
from tenprint.api.middleware import cors_headers_middleware, method_guard_middleware
from tenprint.api.models import (
    ColourPairResponse,
    HealthResponse,
    ValidationErrorResponse,
)
from tenprint.api.params import validate_query
from tenprint.colour.harmony import generate_pair
from tenprint.colour.spaces import colour_to_string, parse_colour
from tenprint.config.models import TenPrintServiceConfig
from tenprint.pattern.config import FieldIssue, InvalidConfig
from tenprint.pattern.svg import render_svg

logger = structlog.get_logger()

API_VERSION = "0.1.0"
SVG_PATH = "/svg"
SVG_MEDIA_TYPE = "image/svg+xml"
INVALID_QUERY_MESSAGE = "Invalid query parameters"


class APIGateway:
    """FastAPI gateway serving generated patterns.

    Endpoints:
    - GET /svg: validate, redirect to the canonical URL if needed, render SVG
    - HEAD /svg: same checks as GET without rendering
    - OPTIONS /svg: CORS preflight
    - GET /colours: generate a harmonious stroke colour pair
    - GET /health: liveness check
    """

    def __init__(self, config: TenPrintServiceConfig) -> None:
        """Initialize API gateway.

        Args:
            config: Service configuration.
        """
        self.config = config
        self.logger = logger.bind(component="api_gateway")

        self.app = FastAPI(
            title="tenprint API",
            description="Seeded 10 PRINT maze patterns as SVG",
            version=API_VERSION,
        )

        self._register_middleware()
        self._register_routes()

    def _register_middleware(self) -> None:
        """Register /svg middleware. The CORS layer is outermost so 405s carry it."""
        self.app.middleware("http")(
            method_guard_middleware(SVG_PATH, self.config.cors.allow_methods)
        )
        self.app.middleware("http")(cors_headers_middleware(SVG_PATH, self.config.cors))

    def _register_routes(self) -> None:
        """Register API routes."""

        @self.app.api_route(SVG_PATH, methods=["GET", "HEAD"])
        async def get_svg(request: Request) -> Response:
            """Render the pattern described by the query string.

            Returns:
                The SVG, a redirect to the canonical URL, a 400 listing every
                invalid parameter, or a 500 if generation fails.
            """
            try:
                result = validate_query(request.query_params)
            except Exception:
                self.logger.exception("svg_parameter_processing_failed")
                return PlainTextResponse(
                    "Internal Server Error during parameter processing",
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )

            if isinstance(result, InvalidConfig):
                self.logger.info("svg_invalid_query", errors=result.as_report())
                return self._validation_error(result)

            params = result.value

            redirect = normalise_url(
                str(request.url),
                params,
                permanent_max_age=self.config.cache.permanent_redirect_max_age,
                temporary_max_age=self.config.cache.temporary_redirect_max_age,
            )
            if redirect is not None:
                self.logger.info(
                    "svg_redirect",
                    status=int(redirect.status_code),
                    location=redirect.location,
                )
                return RedirectResponse(
                    redirect.location,
                    status_code=redirect.status_code,
                    headers={"Cache-Control": redirect.cache_control},
                )

            if request.method == "HEAD":
                return Response(status_code=status.HTTP_200_OK)

            try:
                svg = render_svg(params, params.width, params.height)
            except Exception:
                self.logger.exception(
                    "svg_generation_failed",
                    width=params.width,
                    height=params.height,
                )
                return PlainTextResponse(
                    "Error generating SVG",
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )

            self.logger.debug(
                "svg_rendered", width=params.width, height=params.height, bytes=len(svg)
            )
            return Response(
                content=svg,
                media_type=SVG_MEDIA_TYPE,
                headers={"Cache-Control": f"public, max-age={self.config.cache.svg_max_age}"},
            )

        @self.app.options(SVG_PATH)
        async def options_svg() -> Response:
            """CORS preflight for /svg."""
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        @self.app.get(
            "/colours",
            response_model=ColourPairResponse,
            responses={400: {"model": ValidationErrorResponse}},
        )
        async def get_colours(
            seed: str | None = None, background: str | None = None
        ) -> Response | ColourPairResponse:
            """Generate two stroke colours suited to a background.

            Args:
                seed: Optional seed for a reproducible pair.
                background: Optional CSS background colour.

            Returns:
                The pair as CSS strings, or a 400 if the background is invalid.
            """
            background_colour = None
            if background:
                try:
                    background_colour = parse_colour(background)
                except ValueError as e:
                    return self._validation_error(
                        InvalidConfig(issues=(FieldIssue("background", str(e)),))
                    )

            pair = generate_pair(seed=seed, background=background_colour)
            return ColourPairResponse(
                first_colour=colour_to_string(pair.first_colour),
                second_colour=colour_to_string(pair.second_colour),
            )

        @self.app.get("/health", response_model=HealthResponse)
        async def health_check() -> HealthResponse:
            """Health check endpoint."""
            return HealthResponse(status="healthy", version=API_VERSION)

    def _validation_error(self, result: InvalidConfig) -> JSONResponse:
        """Build the 400 response for invalid input."""
        body = ValidationErrorResponse(
            message=INVALID_QUERY_MESSAGE,
            errors=result.as_report(),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(),
        )


def create_app(config: TenPrintServiceConfig | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Service configuration. Defaults apply when omitted.

    Returns:
        FastAPI application instance.
    """
    gateway = APIGateway(config or TenPrintServiceConfig())
    return gateway.app
