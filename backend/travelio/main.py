import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from travelio.core import config
from travelio.core.errors import register_exception_handlers
from travelio.core.logging import setup_logging
from travelio.db.database import MongoDatabase
from travelio.db.stores import Stores
from travelio.router.bookings import router as bookings_router
from travelio.router.dashboard import router as dashboard_router
from travelio.router.payments import router as payments_router
from travelio.router.system import router as system_router
from travelio.router.users import router as users_router
from travelio.services.identity import FirebaseTokenVerifier
from travelio.services.payment_provider import StripePaymentProvider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: open the database unless stores were injected
    logger.info("Starting up %s...", config.APP_NAME)
    database = app.state.database
    if app.state.stores is None:
        if not await database.ping():
            raise RuntimeError("MongoDB is unreachable; check MONGODB_URI")
        await database.init_indexes()
        app.state.stores = Stores.from_database(database)
    yield
    # Shutdown: close every external client
    logger.info("Shutting down %s...", config.APP_NAME)
    if database is not None:
        database.close()
    await app.state.identity_verifier.close()


def create_app(stores=None, payment_provider=None, identity_verifier=None, database=None) -> FastAPI:
    """
    Build the application. Collaborators not passed in are created from
    configuration; tests pass in-memory ones.
    """
    setup_logging(config.LOG_LEVEL)

    app = FastAPI(title=config.APP_NAME, version=config.APP_VERSION, lifespan=lifespan)

    if stores is None and database is None:
        database = MongoDatabase(config.MONGODB_URI, config.DATABASE_NAME)
    app.state.database = database
    app.state.stores = stores
    app.state.payment_provider = payment_provider or StripePaymentProvider(config.STRIPE_SECRET_KEY)
    app.state.identity_verifier = identity_verifier or FirebaseTokenVerifier(
        config.FIREBASE_PROJECT_ID, config.FIREBASE_CERTS_URL
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(dashboard_router)
    app.include_router(bookings_router)
    app.include_router(payments_router)
    app.include_router(users_router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.SERVER_HOST, port=config.SERVER_PORT)
