from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import Body, Depends, FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..agent.registry import ServiceRegistry
from ..domain.errors import UnknownRegistration, WeatherServiceError
from ..domain.formatting import use_process_locale
from ..infra.config import get_config
from ..observability.logging_utils import (
    init_logging,
    log_event,
    reset_trace_id,
    set_trace_id,
)
from ..schemas import AgentInfo, ToolResult
from ..service import get_service


def require_agent(x_agent_id: Optional[str] = Header(default=None)) -> AgentInfo:
    if not x_agent_id or not x_agent_id.strip():
        raise HTTPException(status_code=400, detail="missing X-Agent-Id header")
    return AgentInfo(id=x_agent_id.strip())


def get_registry(request: Request) -> ServiceRegistry:
    return request.app.state.registry


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg = get_config()
    init_logging(log_path=cfg.log_path)
    locale_applied = use_process_locale()
    log_event(
        "service_started",
        locale_applied=locale_applied,
        title=app.state.registry.metadata.title,
        port=cfg.service_port,
        api_key_configured=bool(cfg.dain_api_key),
    )
    yield


def create_app(registry: Optional[ServiceRegistry] = None) -> FastAPI:
    app = FastAPI(title="Weather DAIN Service", lifespan=lifespan)
    app.state.registry = registry if registry is not None else get_service()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def bind_trace_id(request: Request, call_next):
        trace_id = request.headers.get("x-request-id") or uuid4().hex
        token = set_trace_id(trace_id)
        try:
            response = await call_next(request)
        finally:
            reset_trace_id(token)
        response.headers["X-Request-Id"] = trace_id
        return response

    @app.exception_handler(WeatherServiceError)
    async def _weather_error_handler(_: Request, exc: WeatherServiceError):
        return JSONResponse(
            status_code=502,
            content={"error": str(exc), "kind": exc.kind},
        )

    @app.exception_handler(UnknownRegistration)
    async def _unknown_registration_handler(_: Request, exc: UnknownRegistration):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(ValidationError)
    async def _validation_error_handler(_: Request, exc: ValidationError):
        errors = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        return JSONResponse(status_code=422, content={"detail": errors})

    @app.get("/health")
    async def health():
        cfg = get_config()
        return {"status": "ok", "history_store": cfg.history_store}

    @app.get("/metadata")
    async def metadata(registry: ServiceRegistry = Depends(get_registry)):
        return registry.describe()

    @app.post("/tools/{tool_id}", response_model=ToolResult)
    def invoke_tool(
        tool_id: str,
        payload: Dict[str, Any] = Body(...),
        agent: AgentInfo = Depends(require_agent),
        registry: ServiceRegistry = Depends(get_registry),
    ):
        tool = registry.get_tool(tool_id)
        return tool.invoke(agent, payload)

    @app.get("/contexts/{context_id}")
    def get_context(
        context_id: str,
        agent: AgentInfo = Depends(require_agent),
        registry: ServiceRegistry = Depends(get_registry),
    ):
        context = registry.get_context(context_id)
        return {"id": context.id, "data": context.get_context(agent)}

    @app.get("/pinnables/{pinnable_id}/widget", response_model=ToolResult)
    def get_widget(
        pinnable_id: str,
        agent: AgentInfo = Depends(require_agent),
        registry: ServiceRegistry = Depends(get_registry),
    ):
        pinnable = registry.get_pinnable(pinnable_id)
        return pinnable.get_widget(agent)

    return app


app = create_app()
