"""Schemas for the typed content-collection store.

Each collection document keeps every locale in one record using
``<field>_<locale>`` keys. Documents that fail validation are skipped by the
collection tier, so a broken entry never takes the page down.
"""

import datetime
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from shopper_site.services.locale import SUPPORTED_LOCALES


class CollectionEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class BlogEntry(CollectionEntry):
    slug: str
    date: Union[datetime.datetime, datetime.date, str]
    image: Optional[str] = None
    title_en: str
    title_es: str
    title_fr: str
    description_en: Optional[str] = None
    description_es: Optional[str] = None
    description_fr: Optional[str] = None
    body_en: Optional[str] = None
    body_es: Optional[str] = None
    body_fr: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _date_as_iso(cls, value):
        if isinstance(value, (datetime.date, datetime.datetime)):
            return value.isoformat()
        return value


class ServiceEntry(CollectionEntry):
    slug: str
    order: Optional[int] = None
    image: Optional[str] = None
    price: Optional[str] = None
    price_es: Optional[str] = None
    price_fr: Optional[str] = None
    title_en: str
    title_es: str
    title_fr: str
    description_en: Optional[str] = None
    description_es: Optional[str] = None
    description_fr: Optional[str] = None
    body_en: Optional[str] = None
    body_es: Optional[str] = None
    body_fr: Optional[str] = None


class HowItWorksEntry(CollectionEntry):
    slug: str
    order: Optional[int] = None
    icon: Optional[str] = None
    title_en: str
    title_es: str
    title_fr: str
    description_en: str
    description_es: str
    description_fr: str
    link_text_en: Optional[str] = None
    link_text_es: Optional[str] = None
    link_text_fr: Optional[str] = None
    link_href_en: Optional[str] = None
    link_href_es: Optional[str] = None
    link_href_fr: Optional[str] = None


class TestimonialEntry(CollectionEntry):
    slug: str
    order: Optional[int] = None
    rating: Optional[float] = None
    author: str
    avatar: Optional[str] = None
    role_en: Optional[str] = None
    role_es: Optional[str] = None
    role_fr: Optional[str] = None
    title_en: str
    title_es: str
    title_fr: str
    body_en: Optional[str] = None
    body_es: Optional[str] = None
    body_fr: Optional[str] = None


class FaqEntry(CollectionEntry):
    slug: str
    order: Optional[int] = None
    question_en: str
    question_es: str
    question_fr: str
    body_en: Optional[str] = None
    body_es: Optional[str] = None
    body_fr: Optional[str] = None


class MenuLink(CollectionEntry):
    slug: str
    order: Optional[int] = None
    parent: Optional[str] = None
    section: Optional[str] = None
    text_en: str
    text_es: str
    text_fr: str
    url_en: str
    url_es: str
    url_fr: str


class MenuEntry(CollectionEntry):
    links: List[MenuLink]


# Localized base fields a page document may carry
PAGE_FIELDS = frozenset(
    {
        "title", "description", "body",
        # home
        "hero_title", "hero_subtitle", "hero_cta_text", "hero_cta_href",
        "hero_secondary_cta_text", "hero_secondary_cta_href", "hero_image_alt",
        "services_title", "services_description", "services_cta_text", "services_cta_href",
        "steps_title", "cta_text", "cta_description", "cta_link_text", "cta_link_href",
        # contact
        "name_label", "name_placeholder", "email_label", "email_placeholder",
        "message_label", "message_placeholder", "form_helper", "submit_text",
        "messages_sending", "messages_success", "messages_generic_error",
        "messages_network_error", "messages_rate_limit", "messages_check_fields",
        "messages_name_length", "messages_email_invalid", "messages_message_length",
        # not found
        "cta_href",
    }
)
PAGE_SHARED_FIELDS = frozenset({"hero_image", "logo_src"})


class PageEntry(CollectionEntry):
    """Page document; unknown fields are rejected so typos surface early."""

    # Localized keys are kept as extras; _reject_unknown_fields vets every key first
    model_config = ConfigDict(extra="allow")

    hero_image: Optional[str] = None
    logo_src: Optional[str] = None
    title_en: str
    title_es: str
    title_fr: str

    @model_validator(mode="before")
    @classmethod
    def _reject_unknown_fields(cls, data):
        if not isinstance(data, dict):
            return data
        unknown = []
        for key, value in data.items():
            if key in PAGE_SHARED_FIELDS:
                continue
            base, _, suffix = str(key).rpartition("_")
            if suffix in SUPPORTED_LOCALES and base in PAGE_FIELDS:
                if value is not None and not isinstance(value, str):
                    raise ValueError(f"{key} must be a string")
                continue
            unknown.append(key)
        if unknown:
            raise ValueError(f"Unknown page fields: {', '.join(sorted(map(str, unknown)))}")
        return data


class SettingsEntry(CollectionEntry):
    logo_src: Optional[str] = None
    logo_href: Optional[str] = None
    og_image: Optional[str] = None
    logo_text: Optional[str] = None
    logo_alt: Optional[str] = None
    header_cta_text_en: Optional[str] = None
    header_cta_text_es: Optional[str] = None
    header_cta_text_fr: Optional[str] = None
    header_cta_href_en: Optional[str] = None
    header_cta_href_es: Optional[str] = None
    header_cta_href_fr: Optional[str] = None
    footer_description_en: Optional[str] = None
    footer_description_es: Optional[str] = None
    footer_description_fr: Optional[str] = None


COLLECTION_SCHEMAS: Dict[str, Type[CollectionEntry]] = {
    "pages": PageEntry,
    "blog": BlogEntry,
    "services": ServiceEntry,
    "faq": FaqEntry,
    "testimonials": TestimonialEntry,
    "howitworks": HowItWorksEntry,
    "menus": MenuEntry,
    "settings": SettingsEntry,
}
