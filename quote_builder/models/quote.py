"""
Quote Builder data models.

Editable inputs (company, client, service lines) and the immutable records
produced from them (quote snapshots, history records, service templates).
All models round-trip through ``model_dump(mode="json")`` and
``model_validate`` without loss.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from quote_builder.config.settings import settings


class DiscountType(str, Enum):
    """Per-line discount kinds."""
    NONE = "none"
    AMOUNT = "amount"
    PERCENT = "percent"
    FREE = "free"

    @classmethod
    def parse(cls, value: "DiscountType | str | None") -> "DiscountType":
        """Map arbitrary input to a discount type, treating unknown values as NONE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NONE


class CompanyInfo(BaseModel):
    """Issuing company details printed on the quotation."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    business_number: str = ""
    notes: str = ""


class ClientInfo(BaseModel):
    """Client and project details entered for a quote."""

    model_config = ConfigDict(frozen=True)

    company_name: str = ""
    contact_person: str = ""
    email: str = ""
    project_name: str = ""
    quote_date: date = Field(default_factory=date.today)
    notes: str = ""


class QuotedClient(ClientInfo):
    """Client details as captured in a snapshot, with the derived validity date."""

    valid_until: date


class ServiceLine(BaseModel):
    """
    One priced service entry while a quote is being edited.

    ``unit_price`` and ``amount`` are derived from the pricing inputs and are
    only ever written by the pricing engine.
    """

    id: int
    name: str = ""
    description: str = ""
    quantity: int = 1
    unit: str = Field(default_factory=lambda: settings.pricing.default_unit)
    original_price: float = 0
    discount_type: DiscountType = DiscountType.NONE
    discount_value: float = 0
    discount_reason: str = ""

    # Derived
    unit_price: int = 0
    amount: int = 0


class QuoteLine(ServiceLine):
    """Frozen copy of a service line stored inside a quote snapshot."""

    model_config = ConfigDict(frozen=True)


class Quote(BaseModel):
    """
    Immutable quote snapshot produced by the assembler.

    Renderers format these stored figures and never recompute them.
    ``discount`` is the whole-quote discount percentage; it is carried for
    display and is not subtracted from ``net_amount``.
    """

    model_config = ConfigDict(frozen=True)

    company: CompanyInfo
    client: QuotedClient
    lines: tuple[QuoteLine, ...]
    discount: float = 0
    discount_reason: str = ""
    subtotal: int
    net_amount: int
    tax: float
    total: float


class ServiceTemplate(BaseModel):
    """Reusable seed for a new service line."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    original_price: float = 0


class HistoryRecord(BaseModel):
    """Stored reference to a generated quote, denormalised for list display."""

    model_config = ConfigDict(frozen=True)

    id: str
    client_name: str
    project_name: str
    total_amount: float
    quote_date: date
    quote: Quote
