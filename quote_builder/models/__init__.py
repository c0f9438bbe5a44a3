"""
Data models for the Quote Builder.

This module provides pydantic models for:
- Editable quote input (company, client, service lines)
- Immutable quote snapshots
- Quote history records and reusable service templates
"""

from quote_builder.models.quote import (
    ClientInfo,
    CompanyInfo,
    DiscountType,
    HistoryRecord,
    Quote,
    QuotedClient,
    QuoteLine,
    ServiceLine,
    ServiceTemplate,
)

__all__ = [
    "ClientInfo",
    "CompanyInfo",
    "DiscountType",
    "HistoryRecord",
    "Quote",
    "QuotedClient",
    "QuoteLine",
    "ServiceLine",
    "ServiceTemplate",
]
