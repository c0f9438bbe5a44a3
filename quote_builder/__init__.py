"""
Quote Builder
=============

Pricing and history engine for service quotations.

Components:
- services: line pricing, quote assembly, quote history
- storage: pluggable persistence for history and recent services
- session: editable quote state for a presentation layer
- presentation: plain-text rendering of quote snapshots
"""

__version__ = "1.0.0"

from quote_builder.exceptions import ParseError, QuoteBuilderError, ValidationError
from quote_builder.models import (
    ClientInfo,
    CompanyInfo,
    DiscountType,
    HistoryRecord,
    Quote,
    ServiceLine,
    ServiceTemplate,
)
from quote_builder.services import HistoryStore, PricingEngine, QuoteAssembler
from quote_builder.session import QuoteSession

__all__ = [
    "ClientInfo",
    "CompanyInfo",
    "DiscountType",
    "HistoryRecord",
    "HistoryStore",
    "ParseError",
    "PricingEngine",
    "Quote",
    "QuoteAssembler",
    "QuoteBuilderError",
    "QuoteSession",
    "ServiceLine",
    "ServiceTemplate",
    "ValidationError",
]
