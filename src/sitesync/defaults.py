"""Default dataset seeded into an empty cache.

Every :class:`~sitesync.models.ContentKey` and
:class:`~sitesync.models.FooterField` has a non-empty value so the
content projector never meets an undefined key.
"""

from __future__ import annotations

from dataclasses import dataclass

from sitesync.models import Category, ContentKey, FooterField, Product, Slide

SAMPLE_CATEGORY_ID = "1"
SAMPLE_PRODUCT_ID = "2"
SAMPLE_SLIDE_ID = "3"

DEFAULT_CONTENT: dict[str, str] = {
    ContentKey.WEBSITE_NAME: "Chemec Scientific",
    ContentKey.HERO_TITLE: "Laboratory equipment you can rely on",
    ContentKey.HERO_SUBTITLE: "Instruments, glassware and chemicals for research and industry",
    ContentKey.INTRO_TITLE: "Who we are",
    ContentKey.INTRO_TEXT: "We supply laboratories with certified equipment and expert support.",
    ContentKey.SERVICES_TITLE: "Our services",
    ContentKey.SERVICE_1_TITLE: "Equipment supply",
    ContentKey.SERVICE_1_DESC: "Sourcing of analytical and general laboratory instruments.",
    ContentKey.SERVICE_2_TITLE: "Installation",
    ContentKey.SERVICE_2_DESC: "On-site installation and commissioning by trained engineers.",
    ContentKey.SERVICE_3_TITLE: "Maintenance",
    ContentKey.SERVICE_3_DESC: "Preventive maintenance and calibration contracts.",
    ContentKey.PAGE_ABOUT_TITLE: "About us",
    ContentKey.PAGE_ABOUT_DESC: "Our history, mission and vision.",
    ContentKey.PAGE_PRODUCTS_TITLE: "Products",
    ContentKey.PAGE_PRODUCTS_DESC: "Browse our catalogue by category.",
    ContentKey.PAGE_ACHIEVEMENTS_TITLE: "Achievements",
    ContentKey.PAGE_ACHIEVEMENTS_DESC: "Projects, certifications and milestones.",
    ContentKey.PAGE_ADMIN_TITLE: "Administration",
    ContentKey.PAGE_ADMIN_DESC: "Manage the website content.",
    ContentKey.ABOUT_HISTORY_TITLE: "Our history",
    ContentKey.ABOUT_HISTORY_TEXT: "Founded to bring dependable lab supplies to the region.",
    ContentKey.ABOUT_MISSION_TITLE: "Our mission",
    ContentKey.ABOUT_MISSION_TEXT: "Equip every laboratory with the right tools.",
    ContentKey.ABOUT_VISION_TITLE: "Our vision",
    ContentKey.ABOUT_VISION_TEXT: "To be the first call for scientific equipment.",
    ContentKey.PROJECTS_TITLE: "Projects",
    ContentKey.CERTIFICATIONS_TITLE: "Certifications",
    ContentKey.MILESTONES_TITLE: "Milestones",
}

DEFAULT_FOOTER: dict[str, str] = {
    FooterField.COMPANY_NAME: "Chemec Scientific",
    FooterField.COMPANY_DESCRIPTION: "Scientific and laboratory equipment supplier.",
    FooterField.EMAIL: "info@example.com",
    FooterField.PHONE: "+000 0000 0000",
    FooterField.ADDRESS: "Main Street, City",
    FooterField.FACEBOOK: "https://facebook.com/",
    FooterField.WHATSAPP: "+000 0000 0000",
    FooterField.COPYRIGHT: "© Chemec Scientific. All rights reserved.",
}


@dataclass(frozen=True)
class SeedData:
    """The complete baseline for all five collections."""

    content: dict[str, str]
    footer: dict[str, str]
    categories: list[Category]
    products: list[Product]
    slides: list[Slide]


def build_seed_data() -> SeedData:
    """Return a fresh copy of the default dataset."""
    category = Category(
        id=SAMPLE_CATEGORY_ID,
        name="Laboratory glassware",
        description="Beakers, flasks and volumetric glassware.",
        image="https://images.unsplash.com/photo-1581093458791-9d42e3c7e117?w=400",
    )
    product = Product(
        id=SAMPLE_PRODUCT_ID,
        category_id=category.id,
        name="Borosilicate beaker set",
        description="Graduated beakers from 50 ml to 1000 ml.",
        specs="Borosilicate 3.3, 6 pieces",
        price="On request",
        image="https://images.unsplash.com/photo-1532187863486-abf9dbad1b69?w=400",
    )
    slide = Slide(
        id=SAMPLE_SLIDE_ID,
        image="https://images.unsplash.com/photo-1581094794322-7c6dceeecb91?w=1200",
        title="Equipping modern laboratories",
        subtitle="Quality instruments backed by expert service",
        active=True,
    )
    return SeedData(
        content={str(key): value for key, value in DEFAULT_CONTENT.items()},
        footer={str(key): value for key, value in DEFAULT_FOOTER.items()},
        categories=[category],
        products=[product],
        slides=[slide],
    )
