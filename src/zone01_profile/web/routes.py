"""
FastAPI routes for Zone01 Profile Dashboard.

PURPOSE: Thin route handlers that delegate to presenters.

ROUTE STRUCTURE:
- GET  /            : Profile view if a credential is stored, else login view
- GET  /login       : Login view
- POST /login       : Sign in, store credential, redirect to /
- POST /logout      : Clear credential, login view
- GET  /charts/xp.png : Cumulative XP chart (PNG)
- GET  /api/profile : Profile data as JSON

ERROR HANDLING:
Each handler is the single catch point for its user action. Any failure
while loading or rendering the profile shows the login view with a
generic message; the cause is only logged. The JSON and PNG routes answer
401 when signed out or expired and 502 for every other failure.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from ..accessors import StatisticsAccessors
from ..auth import AuthClient
from ..config import Config
from ..errors import CredentialExpired, InvalidCredentials, ProfileError, Unauthenticated
from ..gateway import QueryGateway
from ..presenters import ChartPresenter, LoginViewModel, ProfilePresenter
from ..session import SessionStore
from .templates import render_login_page, render_profile_page

__all__ = [
    "router",
    "get_session_store",
    "get_http_client",
    "get_auth_client",
    "get_profile_presenter",
    "get_chart_presenter",
]

logger = logging.getLogger(__name__)

router = APIRouter()

_HTML_MEDIA_TYPE = "text/html; charset=utf-8"

# =============================================================================
# Dependency Factory Functions
# =============================================================================


def get_session_store() -> SessionStore:
    """
    Create the session store for a request.

    A new instance per request reads the credential file fresh, so a
    login or logout from the CLI is picked up by the dashboard at once.

    Returns:
        SessionStore using Config.SESSION_DIR.
    """
    return SessionStore()


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Provide an async HTTP client scoped to one request.

    Yields:
        httpx.AsyncClient, closed once the response has been sent.
    """
    async with httpx.AsyncClient(timeout=Config.REQUEST_TIMEOUT) as client:
        yield client


def get_auth_client(
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> AuthClient:
    """Create the sign-in client on the request's HTTP client."""
    return AuthClient(client)


def get_profile_presenter(
    session: Annotated[SessionStore, Depends(get_session_store)],
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> ProfilePresenter:
    """
    Assemble the profile presenter with its dependencies.

    Wires session store -> query gateway -> statistics accessors ->
    presenter. The session store instance is shared with the route, so
    a credential cleared by the gateway is visible to the handler.

    Returns:
        ProfilePresenter ready to load().
    """
    gateway = QueryGateway(session, client)
    return ProfilePresenter(StatisticsAccessors(gateway))


def get_chart_presenter() -> ChartPresenter:
    """Create the PNG chart presenter."""
    return ChartPresenter()


def _login_response(error: str | None = None, username: str = "") -> HTMLResponse:
    html = render_login_page(LoginViewModel(error=error, username=username))
    return HTMLResponse(content=html, media_type=_HTML_MEDIA_TYPE)


# ============================================================================
# Page Routes
# ============================================================================


@router.get("/", response_class=HTMLResponse)
async def index_page(
    session: Annotated[SessionStore, Depends(get_session_store)],
    presenter: Annotated[ProfilePresenter, Depends(get_profile_presenter)],
) -> HTMLResponse:
    """
    Render the profile view, or the login view when signed out.

    Business context: Returning users with a stored credential go
    straight to their profile without seeing the login form. If loading
    fails for any reason (expired credential, backend error, network),
    they land on the login form with a generic error.

    Returns:
        HTMLResponse with either the profile page or the login page.
    """
    if not session.has_credential:
        return _login_response()

    try:
        profile = await presenter.load()
        html = render_profile_page(profile)
    except Exception as e:
        logger.error(f"Error loading profile: {e}")
        return _login_response(Config.PROFILE_ERROR_MESSAGE)

    return HTMLResponse(content=html, media_type=_HTML_MEDIA_TYPE)


@router.get("/login", response_class=HTMLResponse)
async def login_page() -> HTMLResponse:
    """Render the login form."""
    return _login_response()


@router.post("/login", response_model=None)
async def login_submit(
    session: Annotated[SessionStore, Depends(get_session_store)],
    auth: Annotated[AuthClient, Depends(get_auth_client)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> HTMLResponse | RedirectResponse:
    """
    Handle the login form submission.

    Empty fields are rejected before contacting the backend. On success
    the credential is stored and the browser is redirected to / (which
    then renders the profile).

    Args:
        session: Session store receiving the credential.
        auth: Sign-in client.
        username: Form field 'username'.
        password: Form field 'password'.

    Returns:
        303 redirect to / on success, otherwise the login page with the
        failure message.
    """
    if not username or not password:
        return _login_response(Config.MISSING_FIELDS_MESSAGE, username)

    try:
        payload = await auth.login(username, password)
        if not session.set(payload):
            return _login_response("Could not store credential", username)
    except InvalidCredentials as e:
        return _login_response(str(e), username)
    except ProfileError as e:
        logger.error(f"Sign-in failed: {e}")
        return _login_response(str(e), username)
    except ValueError as e:
        logger.error(f"Sign-in returned no credential: {e}")
        return _login_response(str(e), username)

    return RedirectResponse(url="/", status_code=303)


@router.post("/logout", response_class=HTMLResponse)
async def logout(
    session: Annotated[SessionStore, Depends(get_session_store)],
) -> HTMLResponse:
    """Clear the stored credential and show the login view."""
    session.clear()
    logger.info("Logged out")
    return _login_response()


# ============================================================================
# Chart Routes (PNG images)
# ============================================================================


@router.get("/charts/xp.png", response_model=None)
async def xp_chart(
    presenter: Annotated[ProfilePresenter, Depends(get_profile_presenter)],
    charts: Annotated[ChartPresenter, Depends(get_chart_presenter)],
) -> Response:
    """
    Serve the cumulative XP chart as a PNG image.

    Returns:
        image/png response, or a JSON error (see api_profile) when the
        profile cannot be loaded.
    """
    try:
        profile = await presenter.load()
        png_bytes = charts.render_xp_chart(profile.buckets, title=profile.summary.login)
    except Exception as e:
        return _error_json(e)

    return Response(content=png_bytes, media_type="image/png")


# ============================================================================
# API Routes (JSON)
# ============================================================================


@router.get("/api/profile", response_model=None)
async def api_profile(
    presenter: Annotated[ProfilePresenter, Depends(get_profile_presenter)],
) -> dict[str, object] | JSONResponse:
    """
    Get the profile data as JSON.

    Returns:
        Dict with 'summary', 'audit', 'months' and 'skills'. Errors:
        401 when signed out or the credential expired, 502 for any other
        backend or network failure.

    Example:
        >>> # GET /api/profile
        >>> {
        ...     "summary": {"login": "jdoe", "level": 12, "total_xp": 420000, ...},
        ...     "audit": {"up": 1200000, "down": 900000, "ratio": "1.3"},
        ...     "months": [{"label": "janv.", "cumulative_amount": 15000, ...}],
        ...     "skills": [{"name": "go", "grade": 1.0}]
        ... }
    """
    try:
        profile = await presenter.load()
        return profile.to_dict()
    except Exception as e:
        return _error_json(e)


def _error_json(error: Exception) -> JSONResponse:
    """
    Map a profile failure to a JSON error response.

    401 when signed out or the credential expired, 502 otherwise. Only
    ProfileError messages are passed through; anything else is logged
    and answered with the generic message.
    """
    if isinstance(error, Unauthenticated | CredentialExpired):
        return JSONResponse(status_code=401, content={"detail": str(error)})
    if isinstance(error, ProfileError):
        return JSONResponse(status_code=502, content={"detail": str(error)})
    logger.error(f"Error loading profile: {error!r}")
    return JSONResponse(status_code=502, content={"detail": Config.PROFILE_ERROR_MESSAGE})
