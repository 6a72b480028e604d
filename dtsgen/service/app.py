"""FastAPI application entrypoint for dtsgen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError
from ..models import GenerationResult
from ..orchestrator import ConversionOutcome, Orchestrator


class ConvertRequest(BaseModel):
    source: str
    api_packages: List[str] = Field(default_factory=list)
    dts_path: str = "Source.d.ts"
    header_title: Optional[str] = None


class ConvertResponse(BaseModel):
    declaration: str
    types: int
    hooks: int


class GenerateRequest(BaseModel):
    path: str


class GenerateResponse(BaseModel):
    files_written: List[str]
    types: int
    hooks: int
    skipped: List[str]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing dtsgen operations."""

    app = FastAPI(title="dtsgen Service", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/convert", response_model=ConvertResponse)
    async def convert(
        payload: ConvertRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ConvertResponse:
        def _run_convert() -> ConversionOutcome:
            return orchestrator.convert_source(
                payload.source,
                payload.dts_path,
                payload.api_packages,
                header_title=payload.header_title,
            )

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, _run_convert)
        return ConvertResponse(
            declaration=outcome.declaration,
            types=outcome.types,
            hooks=outcome.hooks,
        )

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        def _run_generate() -> GenerationResult:
            return orchestrator.generate(payload.path)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run_generate)
        return GenerateResponse(
            files_written=[str(path) for path in result.files_written],
            types=result.types,
            hooks=result.hooks,
            skipped=[str(path) for path in result.skipped],
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
