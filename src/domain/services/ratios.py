"""Financial ratios derived from statements."""

from decimal import Decimal

from src.domain.constants import NOT_APPLICABLE, NOT_AVAILABLE
from src.domain.models import RatioSet, RatioValue, Statement
from src.utils.decimal_utils import quantize_half_up


HUNDRED = Decimal("100")


def compute_ratios(statement: Statement) -> RatioSet:
    """Compute current ratio, debt-to-equity and net margin.

    Each ratio is guarded independently: a zero denominator yields
    ``NOT_APPLICABLE`` for that ratio only. Values are not rounded.

    Args:
        statement: Aggregated statement of one ledger.

    Returns:
        RatioSet: Unrounded ratios.
    """
    return RatioSet(
        current_ratio=_safe_divide(
            statement.asset_total,
            statement.liability_total,
        ),
        debt_to_equity_ratio=_safe_divide(
            statement.liability_total,
            statement.total_equity,
        ),
        net_margin=_percentage(
            statement.net_income,
            statement.revenue_total,
        ),
    )


def round_ratio(value: RatioValue, places: int = 2) -> RatioValue:
    """Round a ratio for display, passing ``NOT_APPLICABLE`` through."""
    if value is NOT_APPLICABLE:
        return value
    return quantize_half_up(value, places)


def format_ratio(
    value: RatioValue,
    places: int = 2,
    suffix: str = "",
) -> str:
    """Render a ratio rounded to ``places``; ``N/A`` when not applicable."""
    rounded = round_ratio(value, places)
    if rounded is NOT_APPLICABLE:
        return NOT_AVAILABLE
    return f"{rounded}{suffix}"


def _safe_divide(numerator: Decimal, denominator: Decimal) -> RatioValue:
    if denominator == 0:
        return NOT_APPLICABLE
    return numerator / denominator


def _percentage(numerator: Decimal, denominator: Decimal) -> RatioValue:
    ratio = _safe_divide(numerator, denominator)
    if ratio is NOT_APPLICABLE:
        return ratio
    return ratio * HUNDRED


__all__ = ["compute_ratios", "round_ratio", "format_ratio"]
