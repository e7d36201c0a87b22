"""Read-only JSON API over the localized site content."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from shopper_site.config import Settings, get_settings
from shopper_site.models.content import (
    BlogListItem,
    FaqItem,
    FooterLinkItem,
    HeaderMenuItem,
    HomePage,
    HowItWorksItem,
    NavigationItem,
    NotFoundPage,
    PageResponse,
    PostResponse,
    ServiceItem,
    ServiceResponse,
    SiteSettings,
    TestimonialItem,
)
from shopper_site.services.content import ContentNotFoundError, ContentRepository
from shopper_site.services.locale import Locale, UnsupportedLocaleError, ensure_locale
from shopper_site.services.markdown import render_markdown

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/{locale}", tags=["Content"])


def get_repository(settings: Settings = Depends(get_settings)) -> ContentRepository:
    return ContentRepository.from_directory(
        settings.CONTENT_DIR, settings.CONTENT_TIERS, debug=settings.DEBUG
    )


def requested_locale(locale: str) -> Locale:
    try:
        return ensure_locale(locale)
    except UnsupportedLocaleError:
        raise HTTPException(status_code=404, detail=f"Unsupported locale '{locale}'.")


def _not_found(exc: ContentNotFoundError) -> HTTPException:
    logger.info("Content not found", extra={"kind": exc.kind, "slug": exc.slug, "locale": exc.locale.value})
    return HTTPException(status_code=404, detail=f"{exc.kind.capitalize()} '{exc.slug}' not found.")


@router.get("/home", response_model=HomePage, summary="Home page content")
def home(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_home(locale)


@router.get("/not-found", response_model=NotFoundPage, summary="404 page content")
def not_found(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_not_found(locale)


@router.get("/pages/{key}", response_model=PageResponse, summary="Any page with its rendered body")
def page(
    key: str,
    locale: Locale = Depends(requested_locale),
    repo: ContentRepository = Depends(get_repository),
):
    try:
        content = repo.get_page(locale, key)
    except ContentNotFoundError as exc:
        raise _not_found(exc)
    return PageResponse(page=content, html=render_markdown(content.body))


@router.get("/blog", response_model=List[BlogListItem], summary="Blog posts, newest first")
def blog_posts(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_blog_posts(locale)


@router.get("/blog/{slug}", response_model=PostResponse, summary="One blog post")
def blog_post(
    slug: str,
    locale: Locale = Depends(requested_locale),
    repo: ContentRepository = Depends(get_repository),
):
    try:
        post = repo.get_post(locale, slug)
    except ContentNotFoundError as exc:
        raise _not_found(exc)
    return PostResponse(post=post, html=render_markdown(post.body))


@router.get("/services", response_model=List[ServiceItem], summary="Services in display order")
def services(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_services(locale)


@router.get("/services/{slug}", response_model=ServiceResponse, summary="One service")
def service(
    slug: str,
    locale: Locale = Depends(requested_locale),
    repo: ContentRepository = Depends(get_repository),
):
    try:
        item = repo.get_service(locale, slug)
    except ContentNotFoundError as exc:
        raise _not_found(exc)
    return ServiceResponse(service=item, html=render_markdown(item.body))


@router.get("/faq", response_model=List[FaqItem], summary="Frequently asked questions")
def faq(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_faq(locale)


@router.get("/testimonials", response_model=List[TestimonialItem], summary="Client testimonials")
def testimonials(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_testimonials(locale)


@router.get("/how-it-works", response_model=List[HowItWorksItem], summary="How-it-works steps")
def how_it_works(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_how_it_works(locale)


@router.get("/menus/header", response_model=List[HeaderMenuItem], summary="Header menu links")
def header_menu(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_header_menu(locale)


@router.get("/menus/footer", response_model=List[FooterLinkItem], summary="Footer links")
def footer_links(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_footer_links(locale)


@router.get("/navigation", response_model=List[NavigationItem], summary="Header navigation tree")
def navigation(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_navigation(locale)


@router.get("/settings", response_model=SiteSettings, summary="Global site settings")
def site_settings(locale: Locale = Depends(requested_locale), repo: ContentRepository = Depends(get_repository)):
    return repo.get_site_settings(locale)
