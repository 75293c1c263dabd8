import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _init_database() -> None:
    """Create missing tables, then seed the admin user and kanban columns."""
    from app import models  # noqa: F401  (registers every table on Base.metadata)
    from app.database import Base, SessionLocal, engine
    from app.services.kanban_service import seed_default_columns
    from app.services.usuario_service import seed_admin

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        admin = seed_admin(db)
        logger.info("Admin user ready: '%s'", admin.username)
        seed_default_columns(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Startup seeding failed")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    _init_database()
    settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Erro interno do servidor. Tente novamente."},
    )


@app.get(f"{settings.API_PREFIX}/health")
def health_check():
    return {"status": "ok", "app": settings.APP_NAME}


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

from app.routers import auth  # noqa: E402

app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])

# Users and audit log (admin only)
from app.routers import auditoria, usuarios  # noqa: E402

app.include_router(usuarios.router, prefix=f"{settings.API_PREFIX}/usuarios")
app.include_router(auditoria.router, prefix=f"{settings.API_PREFIX}/auditoria")

# Registries: one router per entity
from app.routers import cadastros  # noqa: E402

for _slug, _router in cadastros.ROUTERS.items():
    app.include_router(_router, prefix=f"{settings.API_PREFIX}/cadastros/{_slug}")

# Spreadsheet import
from app.routers import importacao  # noqa: E402

app.include_router(importacao.router, prefix=f"{settings.API_PREFIX}/importacao")

# Alerts
from app.routers import alertas  # noqa: E402

app.include_router(alertas.router, prefix=f"{settings.API_PREFIX}/alertas")

# Export (Excel, PDF, CSV)
from app.routers import exportacao  # noqa: E402

app.include_router(exportacao.router, prefix=f"{settings.API_PREFIX}/exportar")

# Kanban board
from app.routers import kanban  # noqa: E402

app.include_router(kanban.router, prefix=f"{settings.API_PREFIX}/kanban")
