"""FastAPI application entrypoint for readmegen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..fs import ScanError
from ..pipeline import ScaffoldOutcome, Scaffolder


class ProjectRequest(BaseModel):
    path: str
    name: Optional[str] = None
    description: Optional[str] = None


class ProfileResponse(BaseModel):
    name: str
    description: Optional[str] = None
    primary_language: str
    prerequisites: List[str] = []
    install_command: Optional[str] = None
    run_command: Optional[str] = None
    license: Optional[str] = None
    available_tasks: Optional[List[str]] = None
    task_runner: Optional[str] = None
    remote_url: Optional[str] = None
    version: Optional[str] = None
    manifest: Optional[str] = None
    build_files: List[str] = []
    ci: List[str] = []


class ScaffoldResponse(BaseModel):
    markdown: str


class HealthResponse(BaseModel):
    status: str


def _default_scaffolder() -> Scaffolder:
    return Scaffolder()


def create_app(
    scaffolder_factory: Callable[[], Scaffolder] = _default_scaffolder,
) -> FastAPI:
    """Create the FastAPI application exposing readmegen operations."""

    app = FastAPI(title="readmegen", version="0.1.0")

    async def get_scaffolder() -> Scaffolder:
        return scaffolder_factory()

    async def _build(scaffolder: Scaffolder, payload: ProjectRequest) -> ScaffoldOutcome:
        def _run() -> ScaffoldOutcome:
            return scaffolder.build_profile(
                payload.path, name=payload.name, description=payload.description
            )

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/profile", response_model=ProfileResponse)
    async def profile(
        payload: ProjectRequest,
        scaffolder: Scaffolder = Depends(get_scaffolder),
    ) -> ProfileResponse:
        outcome = await _build(scaffolder, payload)
        return ProfileResponse(**outcome.profile.to_dict())

    @app.post("/scaffold", response_model=ScaffoldResponse)
    async def scaffold(
        payload: ProjectRequest,
        scaffolder: Scaffolder = Depends(get_scaffolder),
    ) -> ScaffoldResponse:
        outcome = await _build(scaffolder, payload)
        return ScaffoldResponse(markdown=outcome.markdown)

    @app.exception_handler(ScanError)
    async def scan_error_handler(_: Any, exc: ScanError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)
