from typing import Dict, Literal

from pydantic import BaseModel, Field

from shopper_site.services.locale import DEFAULT_LOCALE, Locale


class ContactSubmission(BaseModel):
    """Normalized contact form input."""

    name: str = ""
    email: str = ""
    message: str = ""
    company: str = ""  # honeypot, must stay empty
    lang: Locale = DEFAULT_LOCALE
    ip: str = ""


class ContactResponse(BaseModel):
    ok: Literal[True] = True


class ContactErrorDetail(BaseModel):
    code: Literal["TOO_MANY_REQUESTS", "BAD_REQUEST", "INTERNAL_SERVER_ERROR"]
    message: str
    fields: Dict[str, str] = Field(default_factory=dict)
