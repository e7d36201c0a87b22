import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from shopper_site.config import get_settings
from shopper_site.routers.contact import router as contact_router
from shopper_site.routers.content import router as content_router
from shopper_site.routers.oauth import router as oauth_router
from shopper_site.routers.site import router as site_router
from shopper_site.services.rate_limit import limiter

settings = get_settings()

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": settings.LOG_LEVEL, "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Shopper Site",
    description="Localized marketing-site content, contact form and CMS login.",
    version="1.0.0",
    debug=settings.DEBUG,
)

# Rate-limiting state
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded for %s: %s", request.url.path, exc.detail)
    return JSONResponse(
        status_code=429,
        content={"detail": {"code": "TOO_MANY_REQUESTS", "message": "rate_limited", "fields": {}}},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(site_router)
app.include_router(contact_router)
app.include_router(oauth_router)
app.include_router(content_router)
