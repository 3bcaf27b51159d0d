"""Storefront FastAPI application.

Single-process web server over one in-memory Store. The Store pushes the
storefront domain context itself, so no per-request domain middleware is
needed.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8080 --reload
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api import cart_router, order_router, product_router, register_error_handlers
from storefront.config import Settings, settings
from storefront.domain import logger, storefront
from storefront.store import Store
from storefront.utils.logging import add_context, clear_context, configure_logging


def create_app(config: Settings = settings, store: Store | None = None) -> FastAPI:
    """Build the ASGI app around ``store`` (a new, optionally seeded Store by default).

    The storefront domain must already be initialized.
    """
    if store is None:
        store = Store()
        if config.seed_catalog:
            store.seed_catalog()

    app = FastAPI(
        title="Storefront API",
        description="Floral lamp shop — catalog, cart and orders",
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Tag every log line emitted while serving a request with its id."""
        clear_context()
        add_context(
            request_id=request.headers.get("x-request-id") or uuid.uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        try:
            return await call_next(request)
        finally:
            clear_context()

    register_error_handlers(app)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    logger.info("Storefront app created", env=config.env, products=len(store.list_products()))
    return app


# ---------------------------------------------------------------------------
# Module-level app for uvicorn
# ---------------------------------------------------------------------------
configure_logging(settings)
storefront.init()

app = create_app()
