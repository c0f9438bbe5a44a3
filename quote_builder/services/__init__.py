"""
Quote Builder services.

Provides functionality for:
- Line pricing with per-line discounts
- Quote snapshot assembly with tax and validity
- Bounded quote history and recent-service tracking
"""

from quote_builder.services.history_service import HistoryStore
from quote_builder.services.pricing_service import PricingEngine, calculate_line_price
from quote_builder.services.quote_service import QuoteAssembler, build_quote

__all__ = [
    "HistoryStore",
    "PricingEngine",
    "QuoteAssembler",
    "build_quote",
    "calculate_line_price",
]
