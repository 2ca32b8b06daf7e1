# ABOUTME: FastAPI application serving the guide in a browser, with HTMX-friendly redirects.
# ABOUTME: Each browser gets a cookie-keyed GameSession; URLs carry the snapshot version for back/forward.

from uuid import uuid4

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from loguru import logger

from battle_guide.config.settings import Settings, get_settings
from battle_guide.missions.loader import load_mission_catalog
from battle_guide.models.mission import MissionCatalog
from battle_guide.session.snapshot_store import GameSession, SessionRegistry
from battle_guide.web.templates import (
    render_game_status,
    render_home_page,
    render_layout,
    render_phase_content,
    render_phase_view,
)


def parse_version(raw: str | None) -> int | None:
    """Version from a query or form value; anything that isn't an integer counts as absent"""
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _phase_redirect(request: Request, session: GameSession) -> Response:
    url = f"/phase?v={session.version}"
    if request.headers.get("HX-Request") == "true":
        return Response(content="", headers={"HX-Redirect": url})
    return RedirectResponse(url=url, status_code=302)


def create_app(
    settings: Settings | None = None,
    catalog: MissionCatalog | None = None,
    registry: SessionRegistry | None = None,
) -> FastAPI:
    """
    Build the web guide.

    Args:
        settings: Configuration (default: get_settings())
        catalog: Missions offered to new sessions (default: loaded from the configured files)
        registry: Session registry to use (default: a new one over `catalog`)
    """
    settings = settings or get_settings()
    if registry is None:
        if catalog is None:
            catalog = load_mission_catalog(settings)
        registry = SessionRegistry(catalog)

    app = FastAPI(title="Battle Guide")
    app.state.registry = registry
    app.state.settings = settings

    @app.middleware("http")
    async def session_cookie(request: Request, call_next):
        session_id = request.cookies.get(settings.session_cookie_name)
        is_new = not session_id
        if is_new:
            session_id = str(uuid4())
        request.state.session_id = session_id

        response = await call_next(request)

        if is_new:
            response.set_cookie(
                key=settings.session_cookie_name,
                value=session_id,
                max_age=settings.session_cookie_max_age,
                path="/",
                httponly=True,
                samesite="lax",
            )
        return response

    def current_session(request: Request) -> GameSession:
        return registry.get_or_create(request.state.session_id)

    @app.get("/", response_class=HTMLResponse)
    def home(request: Request):
        session = current_session(request)
        return HTMLResponse(render_layout(render_home_page(session)))

    @app.post("/start")
    def start(request: Request):
        session = registry.reset(request.state.session_id)
        logger.bind(session_id=session.session_id).info("New game started")
        return _phase_redirect(request, session)

    @app.get("/phase", response_class=HTMLResponse)
    def phase_view(request: Request, v: str | None = None):
        session = current_session(request)
        # Browser back/forward lands on an older (or newer) version
        requested = parse_version(v)
        if requested is not None and requested != session.version:
            session.restore_snapshot(requested)
        return HTMLResponse(render_layout(render_phase_view(session)))

    @app.get("/phase/content", response_class=HTMLResponse)
    def phase_content(request: Request):
        return HTMLResponse(render_phase_content(current_session(request)))

    @app.post("/phase/advance")
    def advance(request: Request, version: str | None = Form(default=None)):
        session = current_session(request)
        session.advance(parse_version(version))
        return _phase_redirect(request, session)

    @app.post("/phase/select")
    def select(
        request: Request,
        choice: str = Form(default=""),
        version: str | None = Form(default=None),
    ):
        session = current_session(request)
        session.select(choice, parse_version(version))
        return _phase_redirect(request, session)

    @app.get("/status", response_class=HTMLResponse)
    def status(request: Request):
        return HTMLResponse(render_game_status(current_session(request)))

    @app.post("/reset")
    def reset(request: Request):
        session = registry.reset(request.state.session_id)
        logger.bind(session_id=session.session_id).info("Game reset")
        return _phase_redirect(request, session)

    return app
