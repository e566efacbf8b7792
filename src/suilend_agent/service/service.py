"""Service implementation for the tool API."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any, List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from ..common.types import Envelope, OperationMetadata, OperationNotFoundError
from ..core.logging_config import setup_logging
from ..core.settings import load_object, settings
from ..tools.dispatch import ToolDispatcher
from ..tools.tool_manager import create_dispatcher

logger = logging.getLogger(__name__)


class InvokeInput(BaseModel):
    """Positional arguments for one operation call."""
    args: List[Any] = Field(default_factory=list)


class ServiceMetadata(BaseModel):
    operations: List[OperationMetadata]


def verify_bearer(
    http_auth: Annotated[
        Optional[HTTPAuthorizationCredentials],
        Depends(HTTPBearer(description="Please provide AUTH_SECRET api key.", auto_error=False)),
    ],
) -> None:
    if not settings.AUTH_SECRET:
        return
    auth_secret = settings.AUTH_SECRET.get_secret_value()
    if not http_auth or http_auth.credentials != auth_secret:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def dispatcher_from_settings() -> ToolDispatcher:
    """Build a dispatcher from the configured client and transaction factories."""
    if not settings.LENDING_CLIENT_FACTORY or not settings.TRANSACTION_FACTORY:
        raise RuntimeError("LENDING_CLIENT_FACTORY and TRANSACTION_FACTORY must be set")
    return create_dispatcher(
        load_object(settings.LENDING_CLIENT_FACTORY),
        load_object(settings.TRANSACTION_FACTORY),
    )


def get_dispatcher(request: Request) -> ToolDispatcher:
    return request.app.state.dispatcher


router = APIRouter(dependencies=[Depends(verify_bearer)])


@router.get("/info")
async def info(dispatcher: ToolDispatcher = Depends(get_dispatcher)) -> ServiceMetadata:
    return ServiceMetadata(operations=dispatcher.catalogue.describe())


@router.post("/tools/{name}/invoke")
async def invoke(
    name: str,
    invoke_input: InvokeInput,
    dispatcher: ToolDispatcher = Depends(get_dispatcher),
) -> List[Envelope]:
    """Invoke a tool with positional arguments and return its envelopes."""
    try:
        return await dispatcher.invoke(name, invoke_input.args)
    except OperationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def create_app(dispatcher: Optional[ToolDispatcher] = None) -> FastAPI:
    """Create the API; without a dispatcher one is built from settings at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(settings.LOG_LEVEL, settings.ENV)
        if app.state.dispatcher is None:
            app.state.dispatcher = dispatcher_from_settings()
            logger.info(
                "Loaded %d tools",
                len(app.state.dispatcher.catalogue.list_items()),
                extra={"network": settings.SUI_NETWORK},
            )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.dispatcher = dispatcher
    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
