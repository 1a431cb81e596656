import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantauth.adapter.services.smtp_notifier import SmtpNotifier
from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.token_codec import TokenCodec
import tenantauth.domain.entities  # noqa: F401  registers tables on SQLModel.metadata

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error_dict = {"code": ErrorCode.INTERNAL_ERROR, "message": "Internal server error"}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = create_async_engine(app.state.config.DB_URI, echo=False, future=True)
    app.state.session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database ready")

    yield

    await engine.dispose()


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="TenantAuth", version="0.1.0", lifespan=lifespan)
    app.state.config = ApplicationConfig
    app.state.token_codec = TokenCodec(
        access_secret=ApplicationConfig.JWT_ACCESS_SECRET,
        refresh_secret=ApplicationConfig.JWT_REFRESH_SECRET,
        access_ttl=timedelta(minutes=ApplicationConfig.JWT_ACCESS_EXPIRES_MINUTES),
        refresh_ttl=timedelta(days=ApplicationConfig.JWT_REFRESH_EXPIRES_DAYS),
    )
    app.state.notifier = SmtpNotifier(
        host=ApplicationConfig.SMTP_HOST,
        port=ApplicationConfig.SMTP_PORT,
        sender=ApplicationConfig.EMAIL_FROM,
        user=ApplicationConfig.SMTP_USER,
        password=ApplicationConfig.SMTP_PASSWORD,
        use_tls=ApplicationConfig.SMTP_USE_TLS,
        app_name=ApplicationConfig.APP_NAME,
        app_base_url=ApplicationConfig.APP_BASE_URL,
        frontend_url=ApplicationConfig.FRONTEND_URL,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from tenantauth.api.routes import auth, health_check, projects

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, prefix=prefix, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(projects.router, prefix=prefix, tags=["Projects"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
