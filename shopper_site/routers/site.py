import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from shopper_site.config import Settings, get_settings
from shopper_site.services.locale import resolve_request_locale

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Site"])

LANG_COOKIE = "lang"
LANG_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


@router.get("/", summary="Redirect to the visitor's language", status_code=302)
async def locale_redirect(request: Request) -> RedirectResponse:
    """Send the visitor to ``/<locale>/``.

    A valid ``lang`` cookie wins over ``Accept-Language``; when no usable
    cookie was sent, one is set for the negotiated locale.
    """
    locale, from_cookie = resolve_request_locale(
        request.cookies.get(LANG_COOKIE), request.headers.get("accept-language")
    )
    response = RedirectResponse(f"/{locale.value}/", status_code=302)
    response.headers["Vary"] = "Accept-Language, Cookie"
    if not from_cookie:
        response.set_cookie(
            LANG_COOKIE, locale.value, max_age=LANG_COOKIE_MAX_AGE, path="/", samesite="lax"
        )
    return response


@router.get("/robots.txt", response_class=PlainTextResponse, summary="Robots policy")
async def robots(request: Request, settings: Settings = Depends(get_settings)) -> PlainTextResponse:
    origin = (settings.SITE_URL or str(request.base_url)).rstrip("/")
    lines = [
        "User-agent: *",
        "Allow: /",
        "",
        f"Sitemap: {origin}/sitemap-index.xml",
        f"Sitemap: {origin}/sitemap.xml",
    ]
    return PlainTextResponse(
        "\n".join(lines),
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get("/health", summary="Health check")
async def health() -> dict:
    return {"status": "ok"}
