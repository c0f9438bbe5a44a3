"""
Shared fixtures for the quote builder tests.
"""

from datetime import date

import pytest

from quote_builder.config.settings import HistorySettings, PricingSettings, Settings
from quote_builder.models.quote import ClientInfo, CompanyInfo, DiscountType, ServiceLine
from quote_builder.services.history_service import HistoryStore
from quote_builder.services.pricing_service import PricingEngine
from quote_builder.storage.memory import MemoryStorage


@pytest.fixture
def app_settings():
    """Settings with the stock business constants."""
    return Settings(
        pricing=PricingSettings(),
        history=HistorySettings(),
    )


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def history_store(memory_storage, app_settings):
    return HistoryStore(memory_storage, app_settings.history)


@pytest.fixture
def company():
    return CompanyInfo(
        name="Proda Corporation",
        address="166 Yeongsin-ro, Yeongdeungpo-gu, Seoul",
        phone="02-0000-0000",
        email="official@example.com",
        business_number="000-00-00000",
    )


@pytest.fixture
def client():
    return ClientInfo(
        company_name="Acme Coffee",
        contact_person="Kim",
        email="kim@acme.example",
        project_name="Spring Campaign",
        quote_date=date(2024, 1, 1),
    )


@pytest.fixture
def make_line():
    """Factory building priced service lines."""
    engine = PricingEngine()

    def _make(
        line_id: int,
        name: str = "Instagram",
        original_price: float = 800000,
        quantity: int = 1,
        discount_type: DiscountType = DiscountType.NONE,
        discount_value: float = 0,
        description: str = "",
    ) -> ServiceLine:
        return engine.price_line(
            ServiceLine(
                id=line_id,
                name=name,
                description=description,
                original_price=original_price,
                quantity=quantity,
                discount_type=discount_type,
                discount_value=discount_value,
            )
        )

    return _make
