"""Predicate filtering for drill-down views.

Predicates are immutable descriptions of a match condition. Filtering never
mutates its input and keeps the relative order of matching records.
Predicates compose by sequential application, which amounts to a logical AND.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field as dataclass_field
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol

from src.domain.constants import UNRESOLVED, AccountCategory
from src.domain.models.accounts import CurrencyDefaults
from src.domain.services.normalization import ensure_canonical
from src.domain.services.resolution import (
    ENTITY_COUNTRY_CODE_ACCESSORS,
    ENTITY_TYPE_ACCESSORS,
    LEDGER_CURRENCY_CODE_ACCESSORS,
    LEDGER_ENTITY_ID_ACCESSORS,
    MISSING,
    Accessor,
    get_path,
    resolve_first,
)
from src.utils.decimal_utils import to_finite_decimal


class RecordPredicate(Protocol):
    """Match condition applied to one record."""

    @property
    def label(self) -> str:
        """Short text for the removable filter badge."""

    @property
    def is_active(self) -> bool:
        """Whether the predicate constrains anything."""

    def matches(self, record: Any) -> bool:
        """Return True when ``record`` satisfies the condition."""


@dataclass(frozen=True)
class FieldPredicate:
    """Exact or substring match on a dotted field path.

    Attributes:
        field: Dotted path, e.g. ``enriched_ledger.ledger_id``.
        value: Expected value; None disables the predicate.
        exact: Case-insensitive equality when True, substring otherwise.
        title: Optional badge title replacing the raw path.
    """

    field: str
    value: Any
    exact: bool = False
    title: str | None = None

    @property
    def is_active(self) -> bool:
        return bool(self.field) and self.value not in (None, "")

    @property
    def label(self) -> str:
        shown = _scalar(self.value)
        if self.title:
            return f"{self.title}: {shown}"
        operator = "=" if self.exact else "contains"
        return f"{self.field} {operator} {shown}"

    def matches(self, record: Any) -> bool:
        item = get_path(record, self.field)
        if item is MISSING:
            return False
        return values_match(item, self.value, self.exact)


@dataclass(frozen=True)
class CanonicalFieldPredicate(FieldPredicate):
    """Field predicate evaluated on the canonical form of a record.

    Raw mappings are normalized first, so the path always refers to a
    canonical account attribute.
    """

    defaults: CurrencyDefaults | None = None

    def matches(self, record: Any) -> bool:
        account = ensure_canonical(record, self.defaults)
        if account is None:
            return False
        return super().matches(account)


@dataclass(frozen=True)
class ResolvedFieldPredicate:
    """Exact match on the first present value of an accessor list."""

    title: str
    accessors: tuple[Accessor, ...]
    value: Any

    @property
    def is_active(self) -> bool:
        return self.value is not None and self.value != ""

    @property
    def label(self) -> str:
        return f"{self.title}: {_scalar(self.value)}"

    def matches(self, record: Any) -> bool:
        resolved = resolve_first(record, self.accessors)
        if resolved is UNRESOLVED:
            return False
        return values_match(resolved, self.value, exact=True)


@dataclass(frozen=True)
class BalanceRangePredicate:
    """Inclusive range on the resolved decimal balance.

    Records whose balance is not numeric never match. A range without any
    bound is inactive.
    """

    minimum: Decimal | None = None
    maximum: Decimal | None = None
    defaults: CurrencyDefaults | None = None

    @property
    def is_active(self) -> bool:
        return self.minimum is not None or self.maximum is not None

    @property
    def label(self) -> str:
        if self.minimum is not None and self.maximum is not None:
            return f"Balance: {self.minimum} to {self.maximum}"
        if self.minimum is not None:
            return f"Balance >= {self.minimum}"
        return f"Balance <= {self.maximum}"

    def matches(self, record: Any) -> bool:
        account = ensure_canonical(record, self.defaults)
        if account is None or not account.has_numeric_balance:
            return False
        balance = account.decimal_balance
        if self.minimum is not None and balance < self.minimum:
            return False
        if self.maximum is not None and balance > self.maximum:
            return False
        return True


@dataclass(frozen=True)
class FilteredView:
    """Records kept by a chain of predicates, tagged with the predicates."""

    records: tuple[Any, ...]
    predicates: tuple[RecordPredicate, ...] = dataclass_field(
        default_factory=tuple
    )

    @property
    def badges(self) -> list[str]:
        return [predicate.label for predicate in self.predicates]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


def values_match(item: Any, expected: Any, exact: bool) -> bool:
    """Compare a record value with a filter value.

    Args:
        item: Value read from the record.
        expected: Value supplied by the filter.
        exact: Case-insensitive equality when True, substring otherwise.

    Returns:
        bool: Whether the values match. None and non-scalar record values
        never match.
    """
    item = _scalar(item)
    expected = _scalar(expected)
    if item is None or isinstance(item, (Mapping, list, tuple)):
        return False
    if exact:
        if isinstance(item, str) or isinstance(expected, str):
            return _text(item).casefold() == _text(expected).casefold()
        return item == expected
    return _text(expected).casefold() in _text(item).casefold()


def filter_records(
    records: Iterable[Any],
    predicate: RecordPredicate,
) -> list[Any]:
    """Return the records matching ``predicate`` in their original order."""
    if not predicate.is_active:
        return list(records)
    return [record for record in records if predicate.matches(record)]


def apply_filters(
    records: Iterable[Any],
    predicates: Iterable[RecordPredicate],
) -> FilteredView:
    """Apply predicates one after the other.

    Args:
        records: Raw or canonical records.
        predicates: Predicates to apply; inactive ones are ignored.

    Returns:
        FilteredView: Matching records with the active predicates.
    """
    remaining = list(records)
    applied: list[RecordPredicate] = []
    for predicate in predicates:
        if not predicate.is_active:
            continue
        remaining = filter_records(remaining, predicate)
        applied.append(predicate)
    return FilteredView(records=tuple(remaining), predicates=tuple(applied))


def by_field(field: str, value: Any, exact: bool = False) -> FieldPredicate:
    return FieldPredicate(field=field, value=value, exact=exact)


def by_type(
    account_type: AccountCategory | str | None,
    defaults: CurrencyDefaults | None = None,
) -> CanonicalFieldPredicate:
    """Match accounts whose resolved category equals ``account_type``."""
    return CanonicalFieldPredicate(
        field="category",
        value=account_type,
        exact=True,
        title="Type",
        defaults=defaults,
    )


def by_ledger(
    ledger_id: Any,
    defaults: CurrencyDefaults | None = None,
) -> CanonicalFieldPredicate:
    """Match accounts owned by ``ledger_id``."""
    return CanonicalFieldPredicate(
        field="ledger_id",
        value=ledger_id,
        exact=True,
        title="Ledger",
        defaults=defaults,
    )


def by_entity(
    entity_id: Any,
    defaults: CurrencyDefaults | None = None,
) -> CanonicalFieldPredicate:
    """Match accounts owned by ``entity_id``."""
    return CanonicalFieldPredicate(
        field="entity_id",
        value=entity_id,
        exact=True,
        title="Entity",
        defaults=defaults,
    )


def by_currency(
    currency_code: str | None,
    defaults: CurrencyDefaults | None = None,
) -> CanonicalFieldPredicate:
    """Match accounts whose resolved currency code is ``currency_code``."""
    return CanonicalFieldPredicate(
        field="currency.code",
        value=currency_code,
        exact=True,
        title="Currency",
        defaults=defaults,
    )


def by_balance_range(
    minimum: Any = None,
    maximum: Any = None,
    defaults: CurrencyDefaults | None = None,
) -> BalanceRangePredicate:
    """Match accounts whose decimal balance lies within the bounds."""
    return BalanceRangePredicate(
        minimum=to_finite_decimal(minimum),
        maximum=to_finite_decimal(maximum),
        defaults=defaults,
    )


def ledger_by_entity(entity_id: Any) -> ResolvedFieldPredicate:
    return ResolvedFieldPredicate(
        "Entity",
        LEDGER_ENTITY_ID_ACCESSORS,
        entity_id,
    )


def ledger_by_currency(currency_code: str | None) -> ResolvedFieldPredicate:
    return ResolvedFieldPredicate(
        "Currency",
        LEDGER_CURRENCY_CODE_ACCESSORS,
        currency_code,
    )


def entity_by_country(country_code: str | None) -> ResolvedFieldPredicate:
    return ResolvedFieldPredicate(
        "Country",
        ENTITY_COUNTRY_CODE_ACCESSORS,
        country_code,
    )


def entity_by_type(entity_type: str | None) -> ResolvedFieldPredicate:
    return ResolvedFieldPredicate("Type", ENTITY_TYPE_ACCESSORS, entity_type)


@dataclass(frozen=True)
class AccountFilterCriteria:
    """Filter inputs of the accounts drill-down."""

    account_type: str | None = None
    ledger_id: Any = None
    entity_id: Any = None
    currency_code: str | None = None
    min_balance: Any = None
    max_balance: Any = None
    field: str | None = None
    value: Any = None
    exact: bool = False

    def predicates(
        self,
        defaults: CurrencyDefaults | None = None,
    ) -> list[RecordPredicate]:
        predicates: list[RecordPredicate] = [
            by_type(self.account_type, defaults),
            by_ledger(self.ledger_id, defaults),
            by_entity(self.entity_id, defaults),
            by_currency(self.currency_code, defaults),
            by_balance_range(self.min_balance, self.max_balance, defaults),
        ]
        if self.field:
            predicates.append(by_field(self.field, self.value, self.exact))
        return predicates


@dataclass(frozen=True)
class LedgerFilterCriteria:
    """Filter inputs of the ledgers list."""

    entity_id: Any = None
    currency_code: str | None = None
    country_code: str | None = None
    field: str | None = None
    value: Any = None
    exact: bool = False

    def predicates(
        self,
        defaults: CurrencyDefaults | None = None,
    ) -> list[RecordPredicate]:
        predicates: list[RecordPredicate] = [
            ledger_by_entity(self.entity_id),
            ledger_by_currency(self.currency_code),
            FieldPredicate(
                "r_country.country_code",
                self.country_code,
                exact=True,
                title="Country",
            ),
        ]
        if self.field:
            predicates.append(by_field(self.field, self.value, self.exact))
        return predicates


@dataclass(frozen=True)
class EntityFilterCriteria:
    """Filter inputs of the entities list."""

    country_code: str | None = None
    entity_type: str | None = None
    field: str | None = None
    value: Any = None
    exact: bool = False

    def predicates(
        self,
        defaults: CurrencyDefaults | None = None,
    ) -> list[RecordPredicate]:
        predicates: list[RecordPredicate] = [
            entity_by_country(self.country_code),
            entity_by_type(self.entity_type),
        ]
        if self.field:
            predicates.append(by_field(self.field, self.value, self.exact))
        return predicates


MODEL_CRITERIA = {
    "account": AccountFilterCriteria,
    "ledger": LedgerFilterCriteria,
    "entity": EntityFilterCriteria,
}

SEARCH_FIELDS: dict[str, tuple[str, ...]] = {
    "entity": ("name", "entity_id", "type", "country_code", "description"),
    "ledger": (
        "name",
        "ledger_id",
        "r_entity.name",
        "country_code",
        "description",
    ),
    "account": (
        "name",
        "account_id",
        "account_code",
        "account_type",
        "description",
    ),
}


def filter_by_model_type(
    records: Iterable[Any],
    filters: Mapping[str, Any],
    model_type: str,
    defaults: CurrencyDefaults | None = None,
) -> FilteredView:
    """Filter records with the criteria of their model type.

    Unknown model types fall back to a generic ``field``/``value`` match.

    Args:
        records: Raw or canonical records.
        filters: Filter inputs keyed by criteria attribute name.
        model_type: ``account``, ``ledger`` or ``entity``.
        defaults: Currency fallbacks used when normalizing raw accounts.

    Returns:
        FilteredView: Matching records with the applied predicates.
    """
    criteria_cls = MODEL_CRITERIA.get(model_type)
    if criteria_cls is None:
        generic = by_field(
            filters.get("field") or "",
            filters.get("value"),
            bool(filters.get("exact", False)),
        )
        return apply_filters(records, [generic])
    known = criteria_cls.__dataclass_fields__
    criteria = criteria_cls(
        **{key: value for key, value in filters.items() if key in known}
    )
    return apply_filters(records, criteria.predicates(defaults))


def get_search_fields(model_type: str) -> tuple[str, ...]:
    """Return the fields searched by default for ``model_type``."""
    return SEARCH_FIELDS.get(model_type, ())


def search_records(
    records: Iterable[Any],
    query: str | None,
    fields: Sequence[str] | None = None,
) -> list[Any]:
    """Case-insensitive free-text search over string and number fields.

    Args:
        records: Raw mappings or canonical objects.
        query: Text to look for; empty queries return every record.
        fields: Dotted paths to search; all first-level fields when empty.

    Returns:
        list[Any]: Matching records in their original order.
    """
    if not query:
        return list(records)
    needle = query.casefold()
    return [
        record
        for record in records
        if _record_contains(record, needle, fields)
    ]


def _record_contains(
    record: Any,
    needle: str,
    fields: Sequence[str] | None,
) -> bool:
    for value in _search_values(record, fields):
        text = _searchable_text(value)
        if text is not None and needle in text:
            return True
    return False


def _search_values(record: Any, fields: Sequence[str] | None) -> list[Any]:
    if fields:
        values = [get_path(record, path) for path in fields]
        return [value for value in values if value is not MISSING]
    if isinstance(record, Mapping):
        return list(record.values())
    if hasattr(record, "__dict__"):
        return list(vars(record).values())
    return []


def _searchable_text(value: Any) -> str | None:
    value = _scalar(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float, Decimal)):
        return str(value).casefold()
    return None


def _scalar(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


__all__ = [
    "RecordPredicate",
    "FieldPredicate",
    "CanonicalFieldPredicate",
    "ResolvedFieldPredicate",
    "BalanceRangePredicate",
    "FilteredView",
    "values_match",
    "filter_records",
    "apply_filters",
    "by_field",
    "by_type",
    "by_ledger",
    "by_entity",
    "by_currency",
    "by_balance_range",
    "ledger_by_entity",
    "ledger_by_currency",
    "entity_by_country",
    "entity_by_type",
    "AccountFilterCriteria",
    "LedgerFilterCriteria",
    "EntityFilterCriteria",
    "MODEL_CRITERIA",
    "SEARCH_FIELDS",
    "filter_by_model_type",
    "get_search_fields",
    "search_records",
]
