import logging
from html import escape

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from shopper_site.config import Settings, get_settings
from shopper_site.models.contact import ContactErrorDetail, ContactResponse, ContactSubmission
from shopper_site.services.contact import public_errors, validate_contact
from shopper_site.services.i18n import t
from shopper_site.services.locale import DEFAULT_LOCALE, UnsupportedLocaleError, ensure_locale, normalize_locale
from shopper_site.services.mailer import EmailSendError, send_contact_email
from shopper_site.services.rate_limit import client_ip, contact_rate_limit, limiter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Contact"])


def _error(status_code: int, code: str, message: str, fields=None) -> HTTPException:
    detail = ContactErrorDetail(code=code, message=message, fields=fields or {})
    return HTTPException(status_code=status_code, detail=detail.model_dump())


def _wants_redirect(request: Request) -> bool:
    """Plain HTML form posts get a redirect; fetch/XHR callers get JSON."""
    is_ajax = request.headers.get("x-requested-with", "").lower() == "fetch"
    accepts_html = "text/html" in request.headers.get("accept", "")
    return accepts_html and not is_ajax


@router.post(
    "/contact",
    response_model=ContactResponse,
    summary="Submit the contact form",
    description=(
        "Accepts form-encoded `name`, `email`, `message`, `company` (honeypot) "
        "and `lang`. Submissions are rate-limited per client IP.  HTML form "
        "posts are redirected to the localized success page; XHR callers "
        "receive `{\"ok\": true}`."
    ),
)
@limiter.limit(contact_rate_limit)
async def submit_contact(request: Request, settings: Settings = Depends(get_settings)):
    try:
        form = await request.form()
        submission = ContactSubmission(
            name=str(form.get("name") or "").strip(),
            email=str(form.get("email") or "").strip(),
            message=str(form.get("message") or "").strip(),
            company=str(form.get("company") or "").strip(),
            lang=normalize_locale(str(form.get("lang") or "")) or DEFAULT_LOCALE,
            ip=client_ip(request),
        )

        errors = validate_contact(submission)
        if errors:
            if "company" in errors:
                logger.warning("Contact submission rejected by honeypot", extra={"ip": submission.ip})
            raise _error(400, "BAD_REQUEST", "validation", public_errors(errors))

        try:
            await send_contact_email(submission, settings)
        except EmailSendError as exc:
            raise _error(400, "BAD_REQUEST", exc.code)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Unexpected error handling contact submission")
        raise _error(500, "INTERNAL_SERVER_ERROR", "internal_error")

    logger.info("Contact submission accepted", extra={"lang": submission.lang.value})
    if _wants_redirect(request):
        return RedirectResponse(f"/{submission.lang.value}/contact/success", status_code=303)
    return ContactResponse()


@router.get("/{locale}/contact/success", response_class=HTMLResponse, summary="Contact confirmation page")
async def contact_success(locale: str) -> HTMLResponse:
    try:
        lang = ensure_locale(locale)
    except UnsupportedLocaleError:
        raise HTTPException(status_code=404, detail="Unsupported locale.")

    page = f"""<!doctype html>
<html lang="{lang.value}">
<head><meta charset="utf-8"><title>{escape(t(lang, "contact.success.title"))}</title></head>
<body>
<main>
<h1>{escape(t(lang, "contact.success.heading"))}</h1>
<p>{escape(t(lang, "contact.success.description"))}</p>
<p><a href="/{lang.value}/">{escape(t(lang, "contact.success.back"))}</a></p>
</main>
</body>
</html>
"""
    return HTMLResponse(page)
