"""
Built-in service template catalog.

Channel operation services are billed per month; production work is billed
per unit.
"""

from quote_builder.config.settings import PricingSettings, settings
from quote_builder.models.quote import ServiceTemplate


BUILT_IN_TEMPLATES: tuple[ServiceTemplate, ...] = (
    ServiceTemplate(
        name="Instagram",
        description="Instagram account management and content creation",
        original_price=800000,
    ),
    ServiceTemplate(
        name="Naver Blog",
        description="Naver blog posting and SEO optimization",
        original_price=600000,
    ),
    ServiceTemplate(
        name="YouTube",
        description="YouTube channel management and video optimization",
        original_price=1200000,
    ),
    ServiceTemplate(
        name="Facebook",
        description="Facebook page management and ad operations",
        original_price=700000,
    ),
    ServiceTemplate(
        name="KakaoTalk",
        description="KakaoTalk channel management and message marketing",
        original_price=500000,
    ),
    ServiceTemplate(
        name="Video Production",
        description="Brand promotion and content video production",
        original_price=1500000,
    ),
    ServiceTemplate(
        name="Product Photography",
        description="Product photo shooting and editing",
        original_price=800000,
    ),
    ServiceTemplate(
        name="Influencer Marketing",
        description="Influencer sourcing and campaign execution",
        original_price=1000000,
    ),
    ServiceTemplate(
        name="Media Advertising",
        description="Online media advertising planning and execution",
        original_price=900000,
    ),
)

MONTHLY_SERVICES = frozenset({
    "Instagram",
    "Naver Blog",
    "YouTube",
    "Facebook",
    "KakaoTalk",
    "Media Advertising",
})


def default_unit_for(name: str, pricing: PricingSettings | None = None) -> str:
    """Billing unit a new line seeded from ``name`` starts with."""
    pricing = pricing or settings.pricing
    if name in MONTHLY_SERVICES:
        return pricing.monthly_unit
    return pricing.default_unit


def find_template(name: str) -> ServiceTemplate | None:
    """Look up a built-in template by exact name."""
    for template in BUILT_IN_TEMPLATES:
        if template.name == name:
            return template
    return None
