import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from leads_backend.api.assignments import lead_assignee_router, madaris_assignment_router
from leads_backend.api.auth import auth_router
from leads_backend.api.exceptions import register_exception_handlers
from leads_backend.api.lead_responses import inbox_router, lead_response_router
from leads_backend.api.leads import lead_router
from leads_backend.api.madaris import curriculum_router, madrasa_router, subject_router
from leads_backend.api.organization import department_router, program_router, section_router
from leads_backend.api.permissions import permission_router
from leads_backend.api.roles import role_router
from leads_backend.api.users import user_router
from leads_backend.database import Database, init_database
from leads_backend.seeding import init_admin_user, seed_from_file
from leads_backend.settings import settings

logger = logging.getLogger(__name__)

def configure_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def startup_logic(database: Database):
    """Seed roles and create the administrator. Only runs in production."""

    if not settings.is_production:
        if settings.SEED_FILE or settings.ADMIN_EMAIL:
            logger.warning(
                f"DEBUG_MODE={settings.DEBUG_MODE}: skipping SEED_FILE and ADMIN_EMAIL bootstrap, "
                "run `leads seed` and `leads create-admin` instead"
            )
        return

    with database.session() as db:
        if settings.SEED_FILE:
            seed_from_file(db, settings.SEED_FILE)

        if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
            init_admin_user(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, settings.ADMIN_ROLE)

@asynccontextmanager
async def lifespan(app: FastAPI):

    owns_database = getattr(app.state, "database", None) is None

    if owns_database:
        configure_logging()
        app.state.database = init_database()

        startup_logic(app.state.database)

    yield

    if owns_database:
        app.state.database.dispose()
        app.state.database = None

def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application. A given ``database`` is used as is and never disposed by the app."""

    app = FastAPI(title="Leads Backend", lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count"],
    )

    register_exception_handlers(app)

    app.include_router(
        auth_router,
        prefix="/auth",
        tags=["auth"]
    )

    app.include_router(
        user_router,
        prefix="/users",
        tags=["users"]
    )

    app.include_router(
        role_router,
        prefix="/roles",
        tags=["roles"]
    )

    permission_router.register_routes(app)

    app.include_router(
        lead_assignee_router,
        prefix="/leads",
        tags=["leads"]
    )

    app.include_router(
        lead_response_router,
        prefix="/leads",
        tags=["leads"]
    )

    lead_router.register_routes(app)

    app.include_router(
        inbox_router,
        prefix="/inbox",
        tags=["inbox"]
    )

    department_router.register_routes(app)
    section_router.register_routes(app)
    program_router.register_routes(app)

    app.include_router(
        madaris_assignment_router,
        prefix="/madaris",
        tags=["madaris"]
    )

    madrasa_router.register_routes(app)
    curriculum_router.register_routes(app)
    subject_router.register_routes(app)

    @app.get("/health", tags=["system"])
    def health():
        return {"status": "ok"}

    @app.head("/", status_code=204)
    def get_status_head():
        return

    return app

app = create_app()
