"""GitHub OAuth handshake for the CMS admin."""

import json
import logging
import secrets
from urllib.parse import urlencode

import httpx

from shopper_site.config import Settings

logger = logging.getLogger(__name__)

TIMEOUT = 10  # seconds
STATE_COOKIE = "oauth_state"
PROVIDER = "github"


class OAuthExchangeError(RuntimeError):
    """Raised when the authorization code could not be exchanged for a token."""


def new_state() -> str:
    """Random CSRF state: 16 bytes as hex."""
    return secrets.token_hex(16)


def authorize_url(settings: Settings, redirect_uri: str, state: str) -> str:
    query = urlencode(
        {
            "client_id": settings.GITHUB_CLIENT_ID or "",
            "redirect_uri": redirect_uri,
            "scope": settings.GITHUB_OAUTH_SCOPE,
            "state": state,
        }
    )
    return f"{settings.OAUTH_AUTHORIZE_URL}?{query}"


async def exchange_code(settings: Settings, code: str, redirect_uri: str) -> str:
    """Trade *code* for an access token.

    Raises:
        OAuthExchangeError: on network errors, non-2xx responses or a
            response without ``access_token``.
    """
    payload = {
        "client_id": settings.GITHUB_CLIENT_ID,
        "client_secret": settings.GITHUB_CLIENT_SECRET,
        "code": code,
        "redirect_uri": redirect_uri,
    }
    try:
        async with httpx.AsyncClient(timeout=TIMEOUT) as client:
            response = await client.post(
                settings.OAUTH_TOKEN_URL,
                json=payload,
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            body = response.json()
    except httpx.HTTPError as exc:
        raise OAuthExchangeError(f"token request failed: {exc}") from exc
    except ValueError as exc:
        raise OAuthExchangeError("token response is not JSON") from exc

    token = body.get("access_token") if isinstance(body, dict) else None
    if not token:
        error = body.get("error") if isinstance(body, dict) else None
        raise OAuthExchangeError(f"no access token in response (error={error!r})")
    return token


def _script_json(value) -> str:
    # Safe to embed inside <script>: no closing tags or HTML comment openers
    return (
        json.dumps(value)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def callback_document(token: str) -> str:
    """HTML page that hands *token* to the CMS window that opened it, then closes."""
    content = _script_json({"token": token, "provider": PROVIDER})
    provider = _script_json(PROVIDER)
    return f"""<!doctype html>
<html><body><script>
(function () {{
  var content = {content};
  var provider = {provider};
  var message = "authorization:" + provider + ":success:" + JSON.stringify(content);
  if (!window.opener) {{
    document.body.innerText = "Token obtained. You can close this window.";
    return;
  }}
  function receiveMessage(event) {{
    window.opener.postMessage(message, event.origin);
    window.removeEventListener("message", receiveMessage, false);
    window.close();
  }}
  window.addEventListener("message", receiveMessage, false);
  window.opener.postMessage("authorizing:" + provider, "*");
}})();
</script></body></html>
"""
