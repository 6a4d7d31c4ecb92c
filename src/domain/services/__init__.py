"""Domain services package."""

from .classification import classify
from .filters import (
    AccountFilterCriteria,
    EntityFilterCriteria,
    FieldPredicate,
    FilteredView,
    LedgerFilterCriteria,
    apply_filters,
    by_balance_range,
    by_currency,
    by_entity,
    by_field,
    by_ledger,
    by_type,
    filter_by_model_type,
    filter_records,
    search_records,
)
from .finance import (
    aggregate,
    build_ledger_statement,
    compute_category_breakdown,
    count_accounts_by_entity,
    select_ledger_accounts,
)
from .normalization import normalize_account, normalize_accounts
from .ratios import compute_ratios, format_ratio, round_ratio
from .resolution import (
    resolve_account_type,
    resolve_currency,
    resolve_entity_id,
    resolve_first,
    resolve_ledger_id,
)
from .scaling import format_amount, format_balance, to_decimal
from .validation import MalformedRecordsError, ensure_record_list

__all__ = [
    "classify",
    "AccountFilterCriteria",
    "EntityFilterCriteria",
    "FieldPredicate",
    "FilteredView",
    "LedgerFilterCriteria",
    "apply_filters",
    "by_balance_range",
    "by_currency",
    "by_entity",
    "by_field",
    "by_ledger",
    "by_type",
    "filter_by_model_type",
    "filter_records",
    "search_records",
    "aggregate",
    "build_ledger_statement",
    "compute_category_breakdown",
    "count_accounts_by_entity",
    "select_ledger_accounts",
    "normalize_account",
    "normalize_accounts",
    "compute_ratios",
    "format_ratio",
    "round_ratio",
    "resolve_account_type",
    "resolve_currency",
    "resolve_entity_id",
    "resolve_first",
    "resolve_ledger_id",
    "format_amount",
    "format_balance",
    "to_decimal",
    "MalformedRecordsError",
    "ensure_record_list",
]
