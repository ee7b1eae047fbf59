import json
import logging
from typing import List

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)

from config import Config, config as default_config
from logging_config import configure_logging
from track_pieces import list_pieces

logger = logging.getLogger(__name__)

SERVICE_NAME = "track-grid-server"


# Pydantic models matching the editor's JSON payload
class ImageState(BaseModel):
    """Placement of one piece image on the grid."""

    model_config = ConfigDict(populate_by_name=True)

    name: StrictStr = ""
    grid_x: StrictInt = Field(0, alias="gridX")
    grid_y: StrictInt = Field(0, alias="gridY")
    angle: StrictInt = 0


class GridUpdateResponse(BaseModel):
    message: str
    data: List[ImageState]


class Piece(BaseModel):
    name: str
    connections: List[str]
    mask: int


_grid_update_adapter = TypeAdapter(List[ImageState])

# Lower-cased JSON key -> field alias
_FIELD_KEYS = {
    (field.alias or name).lower(): field.alias or name
    for name, field in ImageState.model_fields.items()
}
_JSON_WHITESPACE = " \t\n\r"


def _fold_record(record):
    """Match keys case-insensitively; the last match wins and nulls keep the zero value."""
    if record is None:
        return {}
    if not isinstance(record, dict):
        return record
    folded = {}
    for key, value in record.items():
        field = _FIELD_KEYS.get(key.lower())
        if field is not None and value is not None:
            folded[field] = value
    return folded


def parse_grid_update(body: bytes) -> List[ImageState]:
    """
    Decode a grid update body.

    Only the first JSON value is read; anything after it is ignored.
    Invalid UTF-8 is replaced with U+FFFD. A JSON null counts as an
    empty update and a null element as a zero-valued record.

    Raises json.JSONDecodeError or pydantic.ValidationError.
    """
    text = body.decode("utf-8", errors="replace").lstrip(_JSON_WHITESPACE)
    payload, _ = json.JSONDecoder().raw_decode(text)
    if payload is None:
        return []
    if isinstance(payload, list):
        payload = [_fold_record(record) for record in payload]
    return _grid_update_adapter.validate_python(payload)


async def handle_grid_update(request: Request):
    """Log the received image states and echo them back"""
    if request.method != "POST":
        return PlainTextResponse("Invalid request method", status_code=405)

    try:
        image_states = parse_grid_update(await request.body())
    except (json.JSONDecodeError, ValidationError) as err:
        logger.warning("Rejected grid update", extra={"error": type(err).__name__})
        return PlainTextResponse("Invalid request body", status_code=400)

    logger.info("Received grid update:")
    for state in image_states:
        logger.info(
            "Name: %s, GridX: %d, GridY: %d, Angle: %d",
            state.name, state.grid_x, state.grid_y, state.angle,
        )

    return GridUpdateResponse(message="Grid update received", data=image_states)


def create_app(settings: Config = default_config) -> FastAPI:
    # uvicorn imports backend:app directly, bypassing __main__
    configure_logging(SERVICE_NAME, settings.LOG_LEVEL, settings.LOG_FORMAT)

    app = FastAPI(
        title="Track Grid API",
        description="Receives track piece placements from the grid editor and serves the editor's static files.",
        version="1.0.0",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_api_route(
        "/api/grid/update",
        handle_grid_update,
        methods=["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"],
        response_model=GridUpdateResponse,
    )

    @app.get("/api/pieces", response_model=List[Piece])
    async def pieces():
        """List track pieces and the directions they connect to"""
        return list_pieces()

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": SERVICE_NAME}

    # Static files go last so API routes take precedence
    if settings.STATIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
    else:
        logger.warning(
            "Static directory not found; serving API routes only",
            extra={"static_dir": str(settings.STATIC_DIR)},
        )

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("Listening on %s:%d...", default_config.HOST, default_config.PORT)
    uvicorn.run(
        "backend:app",
        host=default_config.HOST,
        port=default_config.PORT,
        reload=default_config.RELOAD,
    )
