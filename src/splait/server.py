"""
HTTP app exposing POST /parse.

Run with ``splait-server`` (or ``uvicorn --factory splait.server:create_app``).
"""

import json
import logging
import os
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ._exceptions import (
    ConfigurationError,
    InvalidInputError,
    UnparseableResponseError,
    UpstreamUnavailableError,
)
from .config import SplaitConfig
from .parser import AsyncSplitParser
from .types import SplitPlan

logger = logging.getLogger(__name__)

INVALID_INPUT = "Invalid input provided"
PARSE_FAILED = "Failed to parse input"


def read_input(body: bytes, max_length: int) -> str:
    """
    Pull the instruction out of a raw ``{"input": "..."}`` request body.

    Raises:
        InvalidInputError: Body is not a JSON object, or input is missing,
            blank, not a string, or too long
    """
    try:
        payload = json.loads(body or b"null")
    except ValueError as e:
        raise InvalidInputError(INVALID_INPUT) from e

    if not isinstance(payload, dict):
        raise InvalidInputError(INVALID_INPUT)

    text = payload.get("input")
    if not isinstance(text, str) or not text.strip():
        raise InvalidInputError(INVALID_INPUT)
    if len(text) > max_length:
        raise InvalidInputError(f"Input exceeds {max_length} characters")
    return text


def create_app(
    config: SplaitConfig | None = None,
    parser: AsyncSplitParser | None = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Settings; read from the environment when omitted
        parser: Prebuilt parser (tests inject one with a mock transport).
            Otherwise one is created on the first request, so a missing API
            key surfaces as a 500 on /parse rather than at startup.
    """
    config = config or SplaitConfig.from_env()
    state: dict[str, Any] = {"parser": parser}

    def get_parser() -> AsyncSplitParser:
        if state["parser"] is None:
            state["parser"] = AsyncSplitParser(config)
        return state["parser"]

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        if state["parser"] is not None:
            await state["parser"].aclose()

    app = FastAPI(title="Splait", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"ok": True}

    @app.post("/parse")
    async def parse(request: Request) -> JSONResponse:
        try:
            text = read_input(await request.body(), config.max_input_length)
        except InvalidInputError as e:
            return JSONResponse({"error": str(e)}, status_code=400)

        try:
            split_parser = get_parser()
        except ConfigurationError as e:
            logger.error("Cannot parse: %s", e)
            return JSONResponse({"error": str(e)}, status_code=500)

        try:
            plan = await split_parser.parse(text)
        except (UpstreamUnavailableError, UnparseableResponseError) as e:
            return JSONResponse(SplitPlan(error=str(e)).to_response(), status_code=500)
        except Exception as e:
            logger.exception("Unexpected error while parsing")
            return JSONResponse(
                SplitPlan(error=str(e) or PARSE_FAILED).to_response(), status_code=500
            )

        return JSONResponse(plan.to_response())

    return app


def main() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=os.environ.get("SPLAIT_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "splait.server:create_app",
        factory=True,
        host=os.environ.get("SPLAIT_HOST", "127.0.0.1"),
        port=int(os.environ.get("SPLAIT_PORT", "8000")),
    )
