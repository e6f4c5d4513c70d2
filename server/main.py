# server/main.py

import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url

from server.api import auth
from server.config import DEFAULT_JWT_SECRET, Settings, load_settings
from server.core.security import PasswordHasher, TokenIssuer
from server.database import create_db_engine, create_session_factory, init_db
from server.exception_handlers import setup_exception_handlers


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings) -> FastAPI:
    engine = create_db_engine(settings.database_url)
    init_db(engine)

    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is not set; signing tokens with the default secret")

    app = FastAPI(title="Auth Service")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.hasher = PasswordHasher()
    app.state.tokens = TokenIssuer(settings.jwt_secret)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(auth.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info(
        "Auth service ready (database=%s)",
        make_url(settings.database_url).render_as_string(hide_password=True),
    )
    return app


def run():
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("Starting server on port %s", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
