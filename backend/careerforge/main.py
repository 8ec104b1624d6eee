from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from careerforge.api import auth, cover_letters, interview, jobs, linkedin, payments, resumes
from careerforge.config import Settings, settings as default_settings
from careerforge.database import Base, build_engine, build_session_factory
from careerforge.errors import register_exception_handlers
from careerforge.models import cover_letter, resume, user_profile  # noqa: F401
from careerforge.providers import Providers, build_providers


logger = logging.getLogger("careerforge")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings | None = None, providers: Providers | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings

    settings.ensure_directories()
    engine = build_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.providers = providers or build_providers(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %s in %.0fms", request.method, request.url.path, response.status_code, duration_ms)
        return response

    register_exception_handlers(app)

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "alive", "message": f"{settings.app_name} API is running."}

    app.include_router(resumes.router, tags=["resumes"])
    app.include_router(cover_letters.router, tags=["cover_letters"])
    app.include_router(jobs.router, tags=["jobs"])
    app.include_router(interview.router, tags=["interview"])
    app.include_router(linkedin.router, tags=["linkedin"])
    app.include_router(payments.router, tags=["payments"])
    app.include_router(auth.router, tags=["auth"])
    return app

