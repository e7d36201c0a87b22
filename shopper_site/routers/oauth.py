import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from shopper_site.config import Settings, get_settings
from shopper_site.services.oauth import (
    STATE_COOKIE,
    OAuthExchangeError,
    authorize_url,
    callback_document,
    exchange_code,
    new_state,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oauth", tags=["CMS OAuth"])


def _redirect_uri(request: Request) -> str:
    return str(request.url_for("oauth_callback"))


@router.get("", summary="Start the CMS login", status_code=302)
async def oauth_start(request: Request, settings: Settings = Depends(get_settings)) -> RedirectResponse:
    """Redirect to the identity provider with a CSRF ``state`` kept in an HttpOnly cookie."""
    if not settings.GITHUB_CLIENT_ID or not settings.GITHUB_CLIENT_SECRET:
        logger.error("OAuth start requested but GitHub OAuth is not configured")
        raise HTTPException(status_code=500, detail="OAuth is not configured.")

    state = new_state()
    response = RedirectResponse(authorize_url(settings, _redirect_uri(request), state), status_code=302)
    response.set_cookie(
        STATE_COOKIE,
        state,
        httponly=True,
        samesite="lax",
        secure=request.url.scheme == "https",
        path="/",
    )
    return response


@router.get("/callback", name="oauth_callback", summary="Finish the CMS login")
async def oauth_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    if not settings.GITHUB_CLIENT_ID or not settings.GITHUB_CLIENT_SECRET:
        raise HTTPException(status_code=500, detail="OAuth is not configured.")
    if not code:
        raise HTTPException(status_code=400, detail="Missing code.")

    expected = request.cookies.get(STATE_COOKIE)
    if not state or not expected or state != expected:
        logger.warning("OAuth callback with invalid state")
        raise HTTPException(status_code=400, detail="Invalid state.")

    try:
        token = await exchange_code(settings, code, _redirect_uri(request))
    except OAuthExchangeError as exc:
        logger.error("OAuth token exchange failed: %s", exc)
        raise HTTPException(status_code=500, detail="Authentication failed.")

    response = HTMLResponse(callback_document(token))
    response.delete_cookie(STATE_COOKIE, path="/")
    return response
