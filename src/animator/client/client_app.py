"""Browser front end for the animation relay.

Each visitor gets an :class:`UploadSession` keyed by a cookie. Every action
mutates that session and redirects back to ``/``, which renders the page
purely from the session fields.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import (
    APIRouter,
    Depends,
    FastAPI,
    Form,
    HTTPException,
    Request,
    status,
)
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from httpx import AsyncClient
from starlette.datastructures import UploadFile

from .client_config import ClientConfig, load_client_config
from .relay_client import RelayClient
from .upload_session import ANIMATION_TYPES, SelectedImage, UploadSession

logger = logging.getLogger(__name__)

SESSION_COOKIE = "animator_session"
TEMPLATES = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

router = APIRouter(tags=["ui"], include_in_schema=False)


class SessionRegistry:
    """In-memory mapping of cookie values to upload sessions.

    Holds at most ``max_sessions`` entries; the least recently used session
    is evicted when a new one would exceed the bound.
    """

    def __init__(self, max_sessions: int = 256) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, UploadSession] = OrderedDict()

    def get_or_create(self, key: str | None) -> tuple[str, UploadSession]:
        if key and key in self._sessions:
            self._sessions.move_to_end(key)
            return key, self._sessions[key]
        new_key = uuid.uuid4().hex
        session = UploadSession()
        self._sessions[new_key] = session
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("client.session.evicted", extra={"session": evicted})
        return new_key, session

    def __contains__(self, key: object) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


def _session(request: Request) -> tuple[str, UploadSession]:
    registry: SessionRegistry = request.app.state.sessions
    return registry.get_or_create(request.cookies.get(SESSION_COOKIE))


def _relay(request: Request) -> RelayClient:
    return request.app.state.relay_client


def _redirect_home(key: str) -> RedirectResponse:
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(SESSION_COOKIE, key, httponly=True, samesite="lax")
    return response


def render_upload_page(request: Request, session: UploadSession) -> HTMLResponse:
    """Render the upload form for ``session``."""
    relay_url: str = request.app.state.client_config.relay_url.rstrip("/")
    context = {
        "session": session,
        "animation_types": ANIMATION_TYPES,
        "result_url": f"{relay_url}{session.result}" if session.result else None,
    }
    return TEMPLATES.TemplateResponse(request, "upload.html", context)


@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> Response:
    key, session = _session(request)
    response = render_upload_page(request, session)
    response.set_cookie(SESSION_COOKIE, key, httponly=True, samesite="lax")
    return response


@router.post("/images")
async def add_images(request: Request) -> Response:
    key, session = _session(request)
    form = await request.form()
    images = [
        value
        for value in form.getlist("images")
        if isinstance(value, UploadFile) and value.filename
    ]
    selected = [
        SelectedImage(
            filename=upload.filename,
            content=await upload.read(),
            content_type=upload.content_type or "application/octet-stream",
        )
        for upload in images
    ]
    session.add_images(selected)
    return _redirect_home(key)


@router.post("/images/{index}/remove")
def remove_image(index: int, request: Request) -> Response:
    key, session = _session(request)
    session.remove_image(index)
    return _redirect_home(key)


@router.get("/images/{index}")
def image_preview(index: int, request: Request) -> Response:
    _, session = _session(request)
    if not 0 <= index < len(session.images):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    image = session.images[index]
    return Response(content=image.content, media_type=image.content_type)


@router.post("/style")
def select_style(request: Request, animation_type: str = Form(..., alias="animationType")) -> Response:
    key, session = _session(request)
    try:
        session.select_animation_type(animation_type)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _redirect_home(key)


@router.post("/submit")
async def submit(
    request: Request,
    animation_type: str | None = Form(None, alias="animationType"),
    relay: RelayClient = Depends(_relay),
) -> Response:
    key, session = _session(request)
    if animation_type in ANIMATION_TYPES:
        session.select_animation_type(animation_type)
    await session.submit(relay)
    if session.error:
        logger.warning("client.submit.failed", extra={"session": key})
    return _redirect_home(key)


def create_client_app(
    config: ClientConfig | None = None,
    *,
    relay_client: RelayClient | None = None,
) -> FastAPI:
    """Build the upload UI bound to a relay instance."""
    cfg = config or load_client_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.relay_client.http.aclose()

    app = FastAPI(
        title="Photo Animation Upload",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.client_config = cfg
    app.state.sessions = SessionRegistry(cfg.max_sessions)
    app.state.relay_client = relay_client or RelayClient(
        AsyncClient(base_url=cfg.relay_url, timeout=cfg.request_timeout_seconds)
    )
    app.include_router(router)
    return app
