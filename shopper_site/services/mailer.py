"""Contact email dispatch through the Resend HTTP API."""

import html
import logging
from typing import Any, Dict, List, Optional

import httpx

from shopper_site.config import Settings
from shopper_site.models.contact import ContactSubmission

logger = logging.getLogger(__name__)

TIMEOUT = 10  # seconds


class EmailSendError(RuntimeError):
    """Raised when the contact email could not be handed to the provider.

    ``code`` is a short client-safe reason (``server_misconfigured`` or
    ``email_send_failed``).
    """

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code


def _address_list(value: Optional[str]) -> List[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def build_message(submission: ContactSubmission, settings: Settings) -> Dict[str, Any]:
    """Assemble the provider payload for *submission*."""
    lang = submission.lang.value
    text = (
        "New contact form submission\n\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Language: {lang}\n"
        f"IP: {submission.ip}\n\n"
        f"Message:\n{submission.message}"
    )
    ip_line = f"<p><strong>IP:</strong> {html.escape(submission.ip)}</p>" if submission.ip else ""
    body_html = (
        "<div>"
        f"<p><strong>Name:</strong> {html.escape(submission.name)}</p>"
        f"<p><strong>Email:</strong> {html.escape(submission.email)}</p>"
        f"<p><strong>Language:</strong> {lang}</p>"
        f"{ip_line}"
        "<hr />"
        "<p><strong>Message:</strong></p>"
        '<pre style="white-space:pre-wrap;word-wrap:break-word;font-family:ui-monospace,Menlo,monospace;">'
        f"{html.escape(submission.message)}</pre>"
        "</div>"
    )
    payload: Dict[str, Any] = {
        "from": settings.EMAIL_FROM,
        "to": _address_list(settings.EMAIL_TO),
        "subject": f"[Contact][{lang}] {submission.name}",
        "text": text,
        "html": body_html,
        "reply_to": submission.email,
    }
    bcc = _address_list(settings.EMAIL_BCC)
    if bcc:
        payload["bcc"] = bcc
    return payload


async def send_contact_email(submission: ContactSubmission, settings: Settings) -> None:
    """Send *submission* to the site owners.

    Raises:
        EmailSendError: when the mailer is not configured or the provider
            rejects or cannot be reached. No retry is attempted.
    """
    if not settings.RESEND_API_KEY or not settings.EMAIL_FROM or not _address_list(settings.EMAIL_TO):
        logger.error("Contact email not sent: mailer is not configured")
        raise EmailSendError("server_misconfigured")

    payload = build_message(submission, settings)
    headers = {"Authorization": f"Bearer {settings.RESEND_API_KEY}"}
    try:
        async with httpx.AsyncClient(timeout=TIMEOUT) as client:
            response = await client.post(settings.RESEND_API_URL, json=payload, headers=headers)
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.error("Email provider returned HTTP %s", exc.response.status_code)
        raise EmailSendError("email_send_failed") from exc
    except httpx.RequestError as exc:
        logger.error("Error contacting email provider: %s", exc)
        raise EmailSendError("email_send_failed") from exc

    logger.info("Contact email sent", extra={"lang": submission.lang.value})
