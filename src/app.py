"""Storefront cart FastAPI application.

Serves the signed-in user's cart and the catalogue owner's product
endpoints. Each request is wrapped in the correct domain context based on
URL prefix; services are built once per app and handed to routes through
FastAPI dependencies.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from catalogue.api import product_router
from catalogue.domain import catalogue
from catalogue.product.management import CatalogueService
from ordering.api.routes import cart_router
from ordering.api.routes import register_exception_handlers as register_cart_handlers
from ordering.cart.catalogue import CatalogueLookup
from ordering.cart.locking import OwnerLocks
from ordering.cart.service import CartService
from ordering.domain import ordering
from shared.config import Settings, get_settings
from shared.db import setup_db
from shared.logging import add_context, clear_context, configure_logging, get_logger

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level, once per process.
# PROTEAN_ENV selects the domain.toml overlay ("test" swaps in memory stores).
_settings = get_settings()
configure_logging(environment=_settings.ENVIRONMENT, level=_settings.LOG_LEVEL, log_dir=_settings.LOG_DIR)

catalogue.init()
ordering.init()
setup_db(catalogue)
setup_db(ordering)

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/products": catalogue,
    "/cart": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or _settings

    app = FastAPI(
        title="Storefront Cart API",
        description="Per-user shopping carts kept consistent with live catalogue price and stock",
    )

    app.state.catalogue_service = CatalogueService()
    app.state.cart_service = CartService(catalogue=CatalogueLookup(), locks=OwnerLocks())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match: health check, docs
        return await call_next(request)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a request id into every log line emitted while serving the request."""
        clear_context()
        add_context(
            request_id=request.headers.get("X-Request-Id") or str(uuid4()),
            method=request.method,
            path=request.url.path,
        )
        try:
            return await call_next(request)
        finally:
            clear_context()

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(cart_router)
    app.include_router(product_router)
    register_exception_handlers(app)
    register_cart_handlers(app)

    # -----------------------------------------------------------------------
    # Health / root
    # -----------------------------------------------------------------------
    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "service": settings.SERVICE_NAME,
                "domains": {"catalogue": {"name": catalogue.name}, "ordering": {"name": ordering.name}},
            }
        )

    logger.info("Application created", domains=[catalogue.name, ordering.name])
    return app


app = create_app()
