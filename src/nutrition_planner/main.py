"""FastAPI application - users, profiles and weekly menu generation."""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from nutrition_planner.errors import ProfileIncompleteError, UserExistsError, UserNotFoundError
from nutrition_planner.llm import LLMClient, OpenAIClient
from nutrition_planner.mail import MailSender
from nutrition_planner.models import Profile
from nutrition_planner.persistence import MenuStore, create_store
from nutrition_planner.services import MenuGenerationPipeline, ProfileService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    email: str | None = None


class ProfileRequest(BaseModel):
    email: str | None = None
    profile: dict[str, Any] | None = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(
    *,
    store: MenuStore | None = None,
    llm: LLMClient | None = None,
    mailer: MailSender | None = None,
) -> FastAPI:
    """Build the app. Collaborators not passed in are created from settings at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize and cleanup."""
        menu_store = store or create_store()
        sender = mailer or MailSender()
        client = llm or OpenAIClient()
        if not client.is_configured:
            logger.warning("LLM_API_KEY is not set. Menu generation will use the fallback menu.")
        if not sender.is_configured:
            logger.warning("SMTP is not configured. Menu emails will not be sent.")
        app.state.profiles = ProfileService(menu_store)
        app.state.pipeline = MenuGenerationPipeline(menu_store, client, sender)
        yield
        await app.state.pipeline.drain()

    app = FastAPI(
        title="Nutrition Planner",
        description="Weekly AI-generated nutrition menus with per-day shopping lists",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.exception_handler(UserNotFoundError)
    async def _user_not_found(request: Request, exc: UserNotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(UserExistsError)
    async def _user_exists(request: Request, exc: UserExistsError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(ProfileIncompleteError)
    async def _profile_incomplete(request: Request, exc: ProfileIncompleteError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s: %s", request.url.path, exc)
        return _error(500, "Server error.")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check for load balancers."""
        return {"status": "ok"}

    @app.post("/api/users", status_code=201)
    async def register(body: RegisterRequest, request: Request) -> Any:
        if not body.email:
            return _error(400, "Email is required.")
        user = request.app.state.profiles.register(body.email)
        return {"user": user.public_view()}

    @app.get("/api/users")
    async def get_user(request: Request, email: str | None = None) -> Any:
        if not email:
            return _error(400, "Email query parameter is required.")
        return {"user": request.app.state.profiles.get_user(email).public_view()}

    @app.put("/api/profile")
    async def update_profile(body: ProfileRequest, request: Request) -> Any:
        if not body.email or body.profile is None:
            return _error(400, "Email and profile are required.")
        user = request.app.state.profiles.update_profile(body.email, body.profile)
        return {"user": user.public_view()}

    @app.post("/api/generate-weekly-menu")
    async def generate_weekly_menu(body: ProfileRequest, request: Request) -> Any:
        """Generate, persist and return a new menu version. Email goes out in the background."""
        if not body.email or body.profile is None:
            return _error(400, "Email and profile are required.")
        request.app.state.profiles.get_user(body.email)
        profile = Profile.from_request(body.profile)
        return await request.app.state.pipeline.generate(body.email, profile)

    @app.get("/api/menus")
    async def list_menus(request: Request, email: str | None = None) -> Any:
        if not email:
            return _error(400, "Email query parameter is required.")
        return {"menus": request.app.state.profiles.menu_history(email)}

    return app


app = create_app()
