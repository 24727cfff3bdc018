"""
FastAPI application for the order service.

This application provides:
1. POST /order - create an order (validate, resolve user, persist, notify)
2. GET /order/{order_id} - fetch a stored order
3. GET /health - liveness check

Run with:
    uv run uvicorn api.main:app --reload

Then visit http://localhost:8000/docs for interactive API documentation.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)

from ordering.workflow import OrderWorkflow, SideEffect
from shared.config import Settings
from shared.exceptions import OrderServiceError, ValidationError
from shared.mailer import Mailer
from shared.models import Order
from shared.order_store import InMemoryOrderStore, OrderStore
from shared.user_directory import HttpUserDirectory, UserDirectory

logger = logging.getLogger("order_api")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[OrderStore] = None,
    user_directory: Optional[UserDirectory] = None,
    notify: Optional[SideEffect] = None,
) -> FastAPI:
    """
    Build the application and its collaborators.

    Any collaborator not supplied is built from settings. Settings default
    to the process environment.
    """
    settings = settings or Settings.from_env()
    logging.getLogger().setLevel(settings.log_level)

    # Resources this app creates and must release at shutdown
    owned: list[Any] = []

    if store is None:
        store = InMemoryOrderStore()
    if user_directory is None:
        user_directory = HttpUserDirectory(settings.user_service_url, timeout=settings.http_timeout)
        owned.append(user_directory)
    if notify is None:
        mailer = Mailer(settings.mail_service_url, timeout=settings.http_timeout)
        owned.append(mailer)
        notify = mailer.send

    workflow = OrderWorkflow(
        store=store,
        user_directory=user_directory,
        notify=notify,
        settings=settings,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup and shutdown."""
        logger.info("Starting order service")
        yield
        logger.info("Shutting down")
        clear = getattr(store, "clear", None)
        if clear is not None:
            clear()
        for resource in owned:
            resource.close()

    app = FastAPI(
        title="Order Service",
        description="Creates orders for existing users and notifies an administrator of the outcome.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.workflow = workflow

    _register_exception_handlers(app)
    _register_routes(app)
    return app


def get_workflow(request: Request) -> OrderWorkflow:
    """Get the workflow bound to the running app."""
    return request.app.state.workflow


# =============================================================================
# Error Mapping
# =============================================================================

def _register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(OrderServiceError)
    async def handle_order_service_error(request: Request, exc: OrderServiceError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        # Malformed JSON bodies are client errors like any other invalid order
        details = "; ".join(err["msg"] for err in exc.errors()) or "malformed request"
        error = ValidationError(f"Invalid request: {details}")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())


# =============================================================================
# Routes
# =============================================================================

def _register_routes(app: FastAPI) -> None:

    @app.get("/health", tags=["Health"])
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "order-service"}

    @app.post("/order", response_model=Order, tags=["Orders"])
    def create_order(
        payload: Any = Body(...),
        workflow: OrderWorkflow = Depends(get_workflow),
    ) -> Order:
        """
        Create an order.

        Validation happens in the workflow so that every malformed order,
        whatever the reason, is answered with 400.
        """
        return workflow.create_order(payload)

    @app.get("/order/{order_id}", response_model=Order, tags=["Orders"])
    def get_order(
        order_id: str,
        workflow: OrderWorkflow = Depends(get_workflow),
    ) -> Order:
        """Get an order by id."""
        return workflow.get_order(order_id)


app = create_app()
