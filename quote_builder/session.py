"""
Editable quote session.

Holds the in-progress quote (company, client, ordered service lines and the
whole-quote discount) as an explicit state object and routes every change
through the pricing, assembly and history services.
"""

from typing import Any

from quote_builder.catalog import default_unit_for
from quote_builder.config.settings import Settings, settings as default_settings
from quote_builder.models.quote import (
    ClientInfo,
    CompanyInfo,
    Quote,
    ServiceLine,
    ServiceTemplate,
)
from quote_builder.services.history_service import HistoryStore
from quote_builder.services.pricing_service import PricingEngine
from quote_builder.services.quote_service import QuoteAssembler
from quote_builder.storage import create_storage
from quote_builder.utils.logging import ServiceLogger


def move_line(lines: list[ServiceLine], from_index: int, to_index: int) -> list[ServiceLine]:
    """
    Return a new list with the line at ``from_index`` moved to ``to_index``.

    Lines between the two positions shift by one.

    Raises:
        IndexError: If either index is outside the list
    """
    size = len(lines)
    if not (0 <= from_index < size and 0 <= to_index < size):
        raise IndexError(f"Cannot move line {from_index} to {to_index} in a list of {size}")

    reordered = list(lines)
    moved = reordered.pop(from_index)
    reordered.insert(to_index, moved)
    return reordered


class QuoteSession:
    """
    In-progress quote owned by the presentation layer.

    The session owns the mutable line list; derived prices are only ever
    written by the pricing engine.
    """

    def __init__(
        self,
        history: HistoryStore | None = None,
        app_settings: Settings | None = None,
    ):
        self.settings = app_settings or default_settings
        self.history = history or HistoryStore(create_storage(self.settings), self.settings.history)
        self.pricing = PricingEngine()
        self.assembler = QuoteAssembler(self.history, self.settings.pricing)
        self.logger = ServiceLogger("session")

        self.company = CompanyInfo(**self.settings.company.model_dump())
        self.client = ClientInfo()
        self.lines: list[ServiceLine] = []
        self.discount: float = 0
        self.discount_reason: str = ""
        self.preview: Quote | None = None
        self._last_line_id = 0

    # Lines

    def add_line(self) -> ServiceLine:
        """Append a blank line."""
        line = ServiceLine(id=self._next_line_id(), unit=self.settings.pricing.monthly_unit)
        self.lines.append(line)
        return line

    def add_line_from_template(self, template: ServiceTemplate) -> ServiceLine:
        """Append a line seeded from a built-in or recent service template."""
        line = self.pricing.price_line(
            ServiceLine(
                id=self._next_line_id(),
                name=template.name,
                description=template.description,
                unit=default_unit_for(template.name, self.settings.pricing),
                original_price=template.original_price,
            )
        )
        self.lines.append(line)
        return line

    def remove_line(self, line_id: int) -> None:
        self.lines = [line for line in self.lines if line.id != line_id]

    def get_line(self, line_id: int) -> ServiceLine | None:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def update_line(self, line_id: int, field: str, value: Any) -> ServiceLine | None:
        """
        Apply an edit event to one line.

        Returns:
            The updated line, or None if no line has ``line_id``
        """
        for index, line in enumerate(self.lines):
            if line.id == line_id:
                updated = self.pricing.apply_edit(line, field, value)
                self.lines[index] = updated
                return updated

        self.logger.log_debug("line_missing", line_id=line_id, field=field)
        return None

    def move_line(self, from_index: int, to_index: int) -> None:
        if from_index == to_index:
            return
        self.lines = move_line(self.lines, from_index, to_index)

    # Header fields

    def update_company(self, **fields: Any) -> CompanyInfo:
        self.company = CompanyInfo.model_validate({**self.company.model_dump(), **fields})
        return self.company

    def update_client(self, **fields: Any) -> ClientInfo:
        self.client = ClientInfo.model_validate({**self.client.model_dump(), **fields})
        return self.client

    def set_discount(self, percent: float, reason: str = "") -> None:
        self.discount = percent
        self.discount_reason = reason

    # Generation and history

    def generate(self) -> Quote:
        """
        Assemble the current state into a quote and record it.

        Raises:
            ValidationError: If the session has no lines
        """
        quote = self.assembler.assemble(
            self.company,
            self.client,
            self.lines,
            self.discount,
            self.discount_reason,
        )
        self.preview = quote
        return quote

    def load_from_history(self, record_id: str) -> Quote | None:
        """
        Replace the editable state with a stored snapshot.

        Returns:
            The loaded quote, or None if the record does not exist
        """
        quote = self.history.load_record(record_id)
        if quote is None:
            return None

        self.company = quote.company
        self.client = ClientInfo(**quote.client.model_dump(exclude={"valid_until"}))
        self.lines = [ServiceLine(**line.model_dump()) for line in quote.lines]
        self.discount = quote.discount
        self.discount_reason = quote.discount_reason
        self.preview = quote
        self._last_line_id = max([self._last_line_id, *(line.id for line in self.lines)])

        self.logger.log_operation_complete(
            "load_from_history",
            record_id=record_id,
            line_count=len(self.lines),
        )
        return quote

    def _next_line_id(self) -> int:
        self._last_line_id = max([self._last_line_id, *(line.id for line in self.lines)]) + 1
        return self._last_line_id
