"""
Plain-text formatting of quote snapshots.

Only formats the figures stored in a Quote; nothing is recalculated here.
"""

from quote_builder.config.settings import PricingSettings, settings
from quote_builder.models.quote import DiscountType, Quote, QuoteLine
from quote_builder.services.pricing_service import round_half_away_from_zero


def format_amount(value: float) -> str:
    """Whole currency units with thousands separators."""
    return f"{round_half_away_from_zero(value):,}"


def format_currency(value: float, pricing: PricingSettings | None = None) -> str:
    pricing = pricing or settings.pricing
    return f"{pricing.currency_symbol}{format_amount(value)}"


def _format_rate(rate: float) -> str:
    return f"{rate * 100:g}%"


def _line_rows(line: QuoteLine) -> list[str]:
    if line.discount_type is DiscountType.NONE:
        unit_price = format_amount(line.unit_price)
    else:
        unit_price = f"{format_amount(line.original_price)} -> {format_amount(line.unit_price)}"

    rows = [
        f"{line.name:<24} {str(line.quantity) + ' ' + line.unit:>10} "
        f"{unit_price:>22} {format_amount(line.amount):>14}"
    ]
    if line.description:
        rows.append(f"  {line.description}")
    if line.discount_type is not DiscountType.NONE and line.discount_reason:
        rows.append(f"  * {line.discount_reason}")
    return rows


def render_text(quote: Quote, pricing: PricingSettings | None = None) -> str:
    """Render a quotation document as plain text."""
    pricing = pricing or settings.pricing
    company = quote.company
    client = quote.client

    out = [
        "QUOTATION",
        f"Quote date: {client.quote_date.isoformat()}",
        f"Valid until: {client.valid_until.isoformat()}",
        "",
        company.name,
    ]
    if company.address:
        out.append(company.address)
    out.append(f"T. {company.phone} | E. {company.email}")
    if company.business_number:
        out.append(f"Business no.: {company.business_number}")
    if company.notes:
        out += ["", "Notes:", company.notes]

    out += [
        "",
        "CLIENT",
        client.company_name,
        client.contact_person,
        client.email,
        "",
        "PROJECT",
        client.project_name,
    ]
    if client.notes:
        out += ["", "Notes:", client.notes]

    out += ["", "SERVICES", f"{'Service':<24} {'Qty':>10} {'Unit price':>22} {'Amount':>14}"]
    for line in quote.lines:
        out += _line_rows(line)

    out += [
        "",
        f"{'Subtotal':<20}{format_currency(quote.subtotal, pricing):>20}",
    ]
    if quote.discount:
        reason = f" ({quote.discount_reason})" if quote.discount_reason else ""
        out.append(f"{'Discount':<20}{quote.discount:>19g}%{reason}")
    out += [
        f"{'Net amount':<20}{format_currency(quote.net_amount, pricing):>20}",
        f"{'Tax (' + _format_rate(pricing.tax_rate) + ')':<20}{format_currency(quote.tax, pricing):>20}",
        f"{'Total':<20}{format_currency(quote.total, pricing):>20}",
    ]
    return "\n".join(out) + "\n"
