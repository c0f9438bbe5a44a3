"""
Tests for quote assembly.
"""

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from quote_builder.exceptions import ValidationError
from quote_builder.models.quote import DiscountType
from quote_builder.services.quote_service import QuoteAssembler, build_quote, valid_until


class TestBuildQuote:
    """Tests for the side-effect free builder."""

    @pytest.fixture
    def three_lines(self, make_line):
        return [
            make_line(i, name=name, discount_type=DiscountType.PERCENT, discount_value=10)
            for i, name in enumerate(["Instagram", "Product Photography", "Naver Blog"], 1)
        ]

    def test_totals_example(self, company, client, three_lines):
        quote = build_quote(company, client, three_lines)
        assert quote.subtotal == 2160000
        assert quote.net_amount == 2160000
        assert quote.tax == 216000
        assert quote.total == 2376000

    def test_total_is_net_plus_ten_percent(self, company, client, make_line):
        lines = [
            make_line(1, original_price=333333, quantity=3),
            make_line(2, original_price=12345, discount_type=DiscountType.PERCENT, discount_value=7),
        ]
        quote = build_quote(company, client, lines)
        assert quote.total == pytest.approx(quote.net_amount * 1.10, rel=1e-12)
        assert quote.tax == quote.net_amount * 0.10
        assert quote.total == quote.net_amount + quote.tax

    def test_tax_not_rounded(self, company, client, make_line):
        quote = build_quote(company, client, [make_line(1, original_price=12345)])
        assert quote.tax == pytest.approx(1234.5)
        assert quote.total == pytest.approx(13579.5)

    def test_quote_discount_is_display_only(self, company, client, three_lines):
        quote = build_quote(company, client, three_lines, discount=15, discount_reason="Launch")
        assert quote.discount == 15
        assert quote.discount_reason == "Launch"
        assert quote.net_amount == quote.subtotal

    def test_valid_until(self, company, client, three_lines):
        quote = build_quote(company, client, three_lines)
        assert quote.client.quote_date == date(2024, 1, 1)
        assert quote.client.valid_until == date(2024, 1, 31)

    def test_lines_copied_in_order(self, company, client, three_lines):
        quote = build_quote(company, client, three_lines)
        assert [line.id for line in quote.lines] == [1, 2, 3]

        three_lines[0].name = "Changed"
        assert quote.lines[0].name == "Instagram"

    def test_snapshot_is_frozen(self, company, client, three_lines):
        quote = build_quote(company, client, three_lines)
        with pytest.raises(PydanticValidationError):
            quote.total = 0
        with pytest.raises(PydanticValidationError):
            quote.lines[0].amount = 0

    def test_empty_lines_rejected(self, company, client):
        with pytest.raises(ValidationError):
            build_quote(company, client, [])


class TestValidUntil:
    """Tests for the validity date."""

    def test_crosses_month_in_leap_year(self):
        assert valid_until(date(2024, 2, 15)) == date(2024, 3, 16)

    def test_custom_days(self):
        assert valid_until(date(2024, 12, 20), 14) == date(2025, 1, 3)


class TestQuoteAssembler:
    """Tests for QuoteAssembler side effects."""

    @pytest.fixture
    def assembler(self, history_store, app_settings):
        return QuoteAssembler(history_store, app_settings.pricing)

    def test_assemble_records_history(self, assembler, history_store, company, client, make_line):
        quote = assembler.assemble(company, client, [make_line(1)])

        assert len(history_store.history) == 1
        record = history_store.history[0]
        assert record.quote == quote
        assert record.client_name == "Acme Coffee"
        assert record.project_name == "Spring Campaign"
        assert record.total_amount == quote.total
        assert record.quote_date == date(2024, 1, 1)

    def test_assemble_touches_recent_services(self, assembler, history_store, company, client, make_line):
        lines = [
            make_line(1, name="Instagram"),
            make_line(2, name="YouTube", original_price=1200000),
            make_line(3, name="", original_price=1000),
            make_line(4, name="Free sample", original_price=0),
        ]
        assembler.assemble(company, client, lines)

        assert [t.name for t in history_store.recent_services] == ["YouTube", "Instagram"]

    def test_empty_assembly_mutates_nothing(self, assembler, history_store, memory_storage, company, client):
        with pytest.raises(ValidationError):
            assembler.assemble(company, client, [])

        assert history_store.history == ()
        assert history_store.recent_services == ()
        assert memory_storage.save_count == 0

    def test_assemble_logs_duration(self, assembler, company, client, make_line, monkeypatch):
        events = []
        monkeypatch.setattr(
            assembler.logger,
            "log_operation_complete",
            lambda operation, **kwargs: events.append((operation, kwargs)),
        )
        assembler.assemble(company, client, [make_line(1)])

        operation, fields = events[-1]
        assert operation == "assemble_quote"
        assert fields["duration_ms"] >= 0

    def test_failed_save_propagates_without_recording(
        self, assembler, history_store, memory_storage, company, client, make_line, monkeypatch
    ):
        def _fail(recent_services, history):
            raise OSError("disk full")

        monkeypatch.setattr(memory_storage, "save", _fail)

        with pytest.raises(OSError):
            assembler.assemble(company, client, [make_line(1, name="Instagram")])

        assert history_store.history == ()
        assert history_store.recent_services == ()
