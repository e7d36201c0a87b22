"""
Configuration settings for the personal shopper site
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Site
    SITE_URL: Optional[str] = None
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Content storage
    CONTENT_DIR: Path = Path("content")
    # Storage tiers tried in order; see shopper_site.services.storage.TIER_TYPES
    CONTENT_TIERS: List[str] = ["collection", "unified", "legacy", "defaults"]

    # CMS OAuth (GitHub backend)
    GITHUB_CLIENT_ID: Optional[str] = None
    GITHUB_CLIENT_SECRET: Optional[str] = None
    GITHUB_OAUTH_SCOPE: str = "repo,user"
    OAUTH_AUTHORIZE_URL: str = "https://github.com/login/oauth/authorize"
    OAUTH_TOKEN_URL: str = "https://github.com/login/oauth/access_token"

    # Contact email dispatch
    RESEND_API_KEY: Optional[str] = None
    RESEND_API_URL: str = "https://api.resend.com/emails"
    EMAIL_FROM: Optional[str] = None
    EMAIL_TO: Optional[str] = None
    EMAIL_BCC: Optional[str] = None

    # Contact rate limiting
    CONTACT_RATE_LIMIT: str = "5/10 minutes"
    RATE_LIMIT_STORAGE_URI: str = "memory://"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
