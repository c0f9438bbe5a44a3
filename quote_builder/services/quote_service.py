"""
Quote assembly service.

Aggregates priced service lines and company/client details into an
immutable Quote snapshot, then records it in the history.
"""

import time
from datetime import date, timedelta
from typing import Sequence

from quote_builder.config.settings import PricingSettings, settings
from quote_builder.exceptions import ValidationError
from quote_builder.models.quote import (
    ClientInfo,
    CompanyInfo,
    Quote,
    QuotedClient,
    QuoteLine,
    ServiceLine,
)
from quote_builder.services.history_service import HistoryStore
from quote_builder.utils.logging import ServiceLogger


def valid_until(quote_date: date, validity_days: int | None = None) -> date:
    """Date the quote expires, a fixed number of calendar days after issue."""
    if validity_days is None:
        validity_days = settings.pricing.validity_days
    return quote_date + timedelta(days=validity_days)


def build_quote(
    company: CompanyInfo,
    client: ClientInfo,
    lines: Sequence[ServiceLine],
    discount: float = 0,
    discount_reason: str = "",
    pricing: PricingSettings | None = None,
) -> Quote:
    """
    Build a quote snapshot without side effects.

    The whole-quote ``discount`` percentage is stored for display only;
    net amount equals the subtotal. Tax is kept at full precision.

    Raises:
        ValidationError: If ``lines`` is empty
    """
    pricing = pricing or settings.pricing
    if not lines:
        raise ValidationError("Add at least one service line before generating a quote")

    subtotal = sum(line.amount for line in lines)
    net_amount = subtotal
    tax = net_amount * pricing.tax_rate
    total = net_amount + tax

    return Quote(
        company=company,
        client=QuotedClient(
            **client.model_dump(),
            valid_until=valid_until(client.quote_date, pricing.validity_days),
        ),
        lines=tuple(QuoteLine(**line.model_dump()) for line in lines),
        discount=discount,
        discount_reason=discount_reason,
        subtotal=subtotal,
        net_amount=net_amount,
        tax=tax,
        total=total,
    )


class QuoteAssembler:
    """
    Service assembling quotes and recording them.

    Holds no quote state of its own; the history store is the only
    collaborator it mutates.
    """

    def __init__(
        self,
        history: HistoryStore,
        pricing_settings: PricingSettings | None = None,
    ):
        self.history = history
        self.pricing = pricing_settings or settings.pricing
        self.logger = ServiceLogger("quote")

    def assemble(
        self,
        company: CompanyInfo,
        client: ClientInfo,
        lines: Sequence[ServiceLine],
        discount: float = 0,
        discount_reason: str = "",
    ) -> Quote:
        """
        Assemble a quote and record it with its services.

        Args:
            company: Issuing company details
            client: Client and project details
            lines: Ordered, non-empty service lines
            discount: Whole-quote discount percentage (display only)
            discount_reason: Reason shown next to the discount

        Returns:
            The new Quote snapshot

        Raises:
            ValidationError: If ``lines`` is empty; nothing is recorded
        """
        started = time.perf_counter()
        self.logger.log_operation_start(
            "assemble_quote",
            client_name=client.company_name,
            project_name=client.project_name,
            line_count=len(lines),
        )

        try:
            quote = build_quote(company, client, lines, discount, discount_reason, self.pricing)
        except ValidationError as e:
            self.logger.log_operation_failed("assemble_quote", e)
            raise

        try:
            record = self.history.record_quote(quote)
            self.history.touch_recent_services(lines)
        except Exception as e:
            self.logger.log_operation_failed("assemble_quote", e, stage="record")
            raise

        self.logger.log_operation_complete(
            "assemble_quote",
            duration_ms=(time.perf_counter() - started) * 1000,
            record_id=record.id,
            subtotal=quote.subtotal,
            total=quote.total,
        )
        return quote
