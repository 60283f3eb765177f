# roombook/main.py

from datetime import timedelta
from typing import Optional

from fastapi import FastAPI

from roombook.api import auth, bookings
from roombook.core.config import Settings, configure_logging
from roombook.core.cors import AllowListCORSMiddleware
from roombook.core.errors import register_error_handlers
from roombook.core.security import TokenService, create_password_context
from roombook.database import create_db_engine, create_session_factory, init_db


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    engine = create_db_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(title="Room Booking API")

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.tokens = TokenService(
        settings.resolve_jwt_secret(),
        algorithm=settings.jwt_algorithm,
        expires_delta=timedelta(hours=settings.token_ttl_hours),
    )
    app.state.pwd_context = create_password_context(settings.bcrypt_rounds)

    app.add_middleware(
        AllowListCORSMiddleware,
        allowed_origins=settings.cors_origins,
    )
    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(bookings.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app

