from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from shopper_site.services.locale import Locale


class PageContent(BaseModel):
    """Resolved content for one page or collection item in one locale."""

    locale: Locale
    path: str
    slug: Optional[str] = None
    frontmatter: Dict[str, Any] = Field(default_factory=dict)  # localized projection only
    body: str = ""


class BlogListItem(PageContent):
    slug: str
    title: str
    description: str = ""
    summary: str = ""  # description, else an excerpt of the body
    date: Optional[str] = None
    image: Optional[str] = None


class ServiceItem(PageContent):
    slug: str
    order: Optional[int] = None
    price: Optional[str] = None
    title: str
    description: str = ""
    image: Optional[str] = None


class FaqItem(PageContent):
    slug: str
    order: Optional[int] = None
    question: str


class TestimonialItem(PageContent):
    slug: str
    order: Optional[int] = None
    rating: Optional[float] = None
    title: str
    author: Optional[str] = None
    role: Optional[str] = None
    avatar: Optional[str] = None


class HowItWorksItem(PageContent):
    slug: str
    order: Optional[int] = None
    title: str
    description: str = ""
    icon: Optional[str] = None
    link_text: Optional[str] = None
    link_href: Optional[str] = None


class HomePage(PageContent):
    title: str
    description: str
    hero_title: str
    hero_subtitle: str
    hero_cta_text: str
    hero_cta_href: str
    hero_secondary_cta_text: Optional[str] = None
    hero_secondary_cta_href: Optional[str] = None
    hero_image: Optional[str] = None
    hero_image_alt: str
    services_title: Optional[str] = None
    services_description: Optional[str] = None
    services_cta_text: Optional[str] = None
    services_cta_href: Optional[str] = None
    steps_title: Optional[str] = None
    cta_text: Optional[str] = None
    cta_description: Optional[str] = None
    cta_link_text: Optional[str] = None
    cta_link_href: Optional[str] = None


class NotFoundPage(PageContent):
    title: str
    description: str
    cta_text: str
    cta_href: str


class HeaderMenuItem(BaseModel):
    slug: str
    order: Optional[int] = None
    parent: Optional[str] = None
    text: str = ""
    href: str = ""


class FooterLinkItem(BaseModel):
    slug: str
    order: Optional[int] = None
    section: Optional[str] = None
    text: str = ""
    href: str = ""


class NavigationItem(BaseModel):
    """Header menu entry with its computed link and nested children."""

    slug: str
    text: str
    href: str
    order: Optional[int] = None
    children: List["NavigationItem"] = Field(default_factory=list)


class SiteSettings(BaseModel):
    logo_src: Optional[str] = None
    logo_href: Optional[str] = None
    og_image: Optional[str] = None
    logo_text: Optional[str] = None
    logo_alt: Optional[str] = None
    header_cta_text: Optional[str] = None
    header_cta_href: Optional[str] = None
    footer_description: Optional[str] = None


class PageResponse(BaseModel):
    page: PageContent
    html: str


class PostResponse(BaseModel):
    post: BlogListItem
    html: str


class ServiceResponse(BaseModel):
    service: ServiceItem
    html: str
