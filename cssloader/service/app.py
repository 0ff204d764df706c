"""FastAPI application for previewing and serving injected stylesheets."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from .. import __version__
from ..config import LoaderConfig
from ..context import FixedContextDetector
from ..orchestrator import CssLoaderOrchestrator
from .middleware import (
    CssInjectionMiddleware,
    OrchestratorFactory,
    request_orchestrator_factory,
    run_blocking,
)

PREVIEW_PREFIX = "/preview"

_PREVIEW_PAGE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title}</title>
</head>
<body>
    <div id="header"><h1>{title}</h1></div>
    <p>Stylesheets for the <strong>{audience}</strong> audience are injected into this page.</p>
</body>
</html>
"""


class HealthResponse(BaseModel):
    status: str
    version: str
    enabled: bool


def create_app(
    config: LoaderConfig,
    orchestrator_factory: Optional[OrchestratorFactory] = None,
) -> FastAPI:
    """Create the FastAPI application with CSS injection installed."""

    app = FastAPI(title="CSS Loader", version=__version__)

    mount_path = config.base_url.rstrip("/")
    if mount_path:
        app.mount(
            mount_path,
            StaticFiles(directory=str(config.css_directory), check_dir=False),
            name="css",
        )

    app.add_middleware(
        CssInjectionMiddleware,
        orchestrator_factory=orchestrator_factory or request_orchestrator_factory(config),
        exclude_prefixes=(mount_path + "/" if mount_path else "", PREVIEW_PREFIX + "/"),
    )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__, enabled=config.enabled)

    @app.get(PREVIEW_PREFIX + "/{audience}", response_class=HTMLResponse)
    async def preview(audience: str) -> HTMLResponse:
        if audience not in config.audience_patterns:
            raise HTTPException(status_code=404, detail=f"Unknown audience: {audience}")
        orchestrator = CssLoaderOrchestrator.from_config(
            config, FixedContextDetector(audience)
        )
        await run_blocking(orchestrator.prepare)
        page = _PREVIEW_PAGE.format(title=f"{audience.title()} preview", audience=audience)
        return HTMLResponse(orchestrator.inject_into_buffer(page))

    return app


def run_service(
    config: LoaderConfig, host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(config), host=host, port=port)
