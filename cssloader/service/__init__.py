"""HTTP host integration for the CSS loader."""

from .app import create_app, run_service
from .middleware import (
    FLAGS_SCOPE_KEY,
    CssInjectionMiddleware,
    OrchestratorFactory,
    request_orchestrator_factory,
)

__all__ = [
    "CssInjectionMiddleware",
    "FLAGS_SCOPE_KEY",
    "OrchestratorFactory",
    "create_app",
    "request_orchestrator_factory",
    "run_service",
]
