"""Site text content and footer field models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import ConfigDict

from sitesync.models._base import FieldMapModel


def _to_hyphen(name: str) -> str:
    return name.replace("_", "-")


class ContentKey(StrEnum):
    """Every content key the site pages read."""

    # Home
    WEBSITE_NAME = "website-name"
    HERO_TITLE = "hero-title"
    HERO_SUBTITLE = "hero-subtitle"
    INTRO_TITLE = "intro-title"
    INTRO_TEXT = "intro-text"
    SERVICES_TITLE = "services-title"
    SERVICE_1_TITLE = "service-1-title"
    SERVICE_1_DESC = "service-1-desc"
    SERVICE_2_TITLE = "service-2-title"
    SERVICE_2_DESC = "service-2-desc"
    SERVICE_3_TITLE = "service-3-title"
    SERVICE_3_DESC = "service-3-desc"
    # Page headers
    PAGE_ABOUT_TITLE = "page-about-title"
    PAGE_ABOUT_DESC = "page-about-desc"
    PAGE_PRODUCTS_TITLE = "page-products-title"
    PAGE_PRODUCTS_DESC = "page-products-desc"
    PAGE_ACHIEVEMENTS_TITLE = "page-achievements-title"
    PAGE_ACHIEVEMENTS_DESC = "page-achievements-desc"
    PAGE_ADMIN_TITLE = "page-admin-title"
    PAGE_ADMIN_DESC = "page-admin-desc"
    # About
    ABOUT_HISTORY_TITLE = "about-history-title"
    ABOUT_HISTORY_TEXT = "about-history-text"
    ABOUT_MISSION_TITLE = "about-mission-title"
    ABOUT_MISSION_TEXT = "about-mission-text"
    ABOUT_VISION_TITLE = "about-vision-title"
    ABOUT_VISION_TEXT = "about-vision-text"
    # Achievements
    PROJECTS_TITLE = "projects-title"
    CERTIFICATIONS_TITLE = "certifications-title"
    MILESTONES_TITLE = "milestones-title"


class FooterField(StrEnum):
    """The closed set of footer fields."""

    COMPANY_NAME = "companyName"
    COMPANY_DESCRIPTION = "companyDescription"
    EMAIL = "email"
    PHONE = "phone"
    ADDRESS = "address"
    FACEBOOK = "facebook"
    WHATSAPP = "whatsapp"
    COPYRIGHT = "copyright"


class SiteContent(FieldMapModel):
    """Text content map keyed by :class:`ContentKey`.

    Stored keys outside :class:`ContentKey` are kept in the cache but
    ignored here.
    """

    KEYS = ContentKey

    model_config = ConfigDict(alias_generator=_to_hyphen)

    website_name: str = ""
    hero_title: str = ""
    hero_subtitle: str = ""
    intro_title: str = ""
    intro_text: str = ""
    services_title: str = ""
    service_1_title: str = ""
    service_1_desc: str = ""
    service_2_title: str = ""
    service_2_desc: str = ""
    service_3_title: str = ""
    service_3_desc: str = ""
    page_about_title: str = ""
    page_about_desc: str = ""
    page_products_title: str = ""
    page_products_desc: str = ""
    page_achievements_title: str = ""
    page_achievements_desc: str = ""
    page_admin_title: str = ""
    page_admin_desc: str = ""
    about_history_title: str = ""
    about_history_text: str = ""
    about_mission_title: str = ""
    about_mission_text: str = ""
    about_vision_title: str = ""
    about_vision_text: str = ""
    projects_title: str = ""
    certifications_title: str = ""
    milestones_title: str = ""


class FooterContent(FieldMapModel):
    """Footer fields keyed by :class:`FooterField`."""

    KEYS = FooterField

    company_name: str = ""
    company_description: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    facebook: str = ""
    whatsapp: str = ""
    copyright: str = ""
