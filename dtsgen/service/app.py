"""FastAPI application entrypoint for dtsgen service mode."""

from __future__ import annotations

from typing import Callable, List, Optional

from fastapi import Depends, FastAPI
from pydantic import BaseModel

from ..models import ModuleConfig
from ..registry import ModuleRegistry
from ..translate import translate


class TranslateRequest(BaseModel):
    source: str
    module_name: str
    source_file: str = "<request>"
    main_export: Optional[str] = None
    filter_classes: List[str] = []
    declare_global_var: bool = False


class TranslateResponse(BaseModel):
    status: str
    declaration: Optional[str] = None
    reason: Optional[str] = None


class ModuleInfo(BaseModel):
    name: str
    source_file: str
    main_export: Optional[str] = None
    filter_classes: List[str] = []
    declare_global_var: bool = False


class HealthResponse(BaseModel):
    status: str


def _default_registry() -> ModuleRegistry:
    return ModuleRegistry()


def create_app(
    registry_factory: Callable[[], ModuleRegistry] = _default_registry,
) -> FastAPI:
    """Create the FastAPI application exposing dtsgen translation."""

    app = FastAPI(title="dtsgen Service", version="1.0.0")

    async def get_registry() -> ModuleRegistry:
        return registry_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/modules", response_model=List[ModuleInfo])
    async def list_modules(
        registry: ModuleRegistry = Depends(get_registry),
    ) -> List[ModuleInfo]:
        return [
            ModuleInfo(
                name=module.name,
                source_file=module.source_file,
                main_export=module.main_export,
                filter_classes=list(module.filter_classes),
                declare_global_var=module.declare_global_var,
            )
            for module in registry
        ]

    @app.post("/translate", response_model=TranslateResponse)
    def translate_unit(payload: TranslateRequest) -> TranslateResponse:
        # Sync handler: FastAPI runs it in its threadpool.
        config = ModuleConfig(
            name=payload.module_name,
            source_file=payload.source_file,
            main_export=payload.main_export,
            filter_classes=tuple(payload.filter_classes),
            declare_global_var=payload.declare_global_var,
        )
        outcome = translate(payload.source, config)
        return TranslateResponse(
            status=outcome.status,
            declaration=outcome.declaration,
            reason=outcome.reason,
        )

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
