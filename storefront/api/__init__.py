# storefront/api/__init__.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.errors import register_error_handlers
from storefront.api.middleware import AccessGateMiddleware
from storefront.api.routers import auth, cart, catalog, health, orders, users, wishlist
from storefront.celery_worker import configure_celery
from storefront.data.database import build_engine, build_session_factory, init_db
from storefront.services.access_gate import AccessGate, default_rules
from storefront.services.catalog import HttpCatalog
from storefront.services.identity_provider import GoogleIdentityClient
from storefront.services.notification_service import NotificationService
from storefront.services.pricing import build_price_verifier
from storefront.services.revocation import RevocationList, build_revocation_list
from storefront.services.token_service import TokenService
from storefront.utils.logging import configure_logging, get_logger
from storefront.utils.settings import Settings

logger = get_logger(__name__)


def create_app(
    settings: Settings,
    revocation: RevocationList | None = None,
    google: GoogleIdentityClient | None = None,
) -> FastAPI:
    configure_logging(settings.log_level)
    configure_celery(settings)

    engine = build_engine(settings.database_url)
    init_db(engine)

    token_service = TokenService(settings.jwt_secret, settings.token_lifetime_seconds)
    revocation = revocation or build_revocation_list(settings.revocation_redis_url)
    gate = AccessGate(default_rules(settings.api_url), token_service, revocation)

    app = FastAPI(
        title="Storefront",
        version="1.0.0",
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = token_service
    app.state.revocation = revocation
    app.state.gate = gate
    app.state.remote_catalog = HttpCatalog(settings.product_service_url) if settings.product_service_url else None
    app.state.price_verifier = build_price_verifier(settings.price_verification)
    app.state.notifications = NotificationService()
    app.state.google = google or GoogleIdentityClient(settings.google_client_id)

    register_error_handlers(app)

    #kolejnosc: ostatnio dodany middleware jest zewnetrzny - CORS przed bramka
    app.add_middleware(AccessGateMiddleware, gate=gate)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Content-Type", "Authorization"],
        )

    # Include routers
    api = settings.api_url
    app.include_router(health.router)
    app.include_router(auth.router, prefix=api)
    app.include_router(users.router, prefix=api)
    app.include_router(catalog.products_router, prefix=api)
    app.include_router(catalog.collections_router, prefix=api)
    app.include_router(catalog.search_router, prefix=api)
    app.include_router(cart.router, prefix=api)
    app.include_router(wishlist.router, prefix=api)
    app.include_router(orders.router, prefix=api)

    logger.info(f"Storefront API mounted at {api} ({len(gate.rules)} public rules)")
    return app
