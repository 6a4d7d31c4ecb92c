"""Tests for the predicate filter engine."""

from decimal import Decimal

from src.domain.constants import AccountCategory
from src.domain.models import CanonicalAccount, CurrencyDescriptor
from src.domain.services.filters import (
    AccountFilterCriteria,
    FieldPredicate,
    FilteredView,
    apply_filters,
    by_balance_range,
    by_currency,
    by_entity,
    by_field,
    by_ledger,
    by_type,
    filter_by_model_type,
    filter_records,
    get_search_fields,
    ledger_by_entity,
    search_records,
    values_match,
)


def _account(account_id, name, category, balance, ledger_id=1, entity_id="E1"):
    return CanonicalAccount(
        id=account_id,
        name=name,
        category=category,
        decimal_balance=None if balance is None else Decimal(balance),
        currency=CurrencyDescriptor("USD", 2),
        ledger_id=ledger_id,
        entity_id=entity_id,
    )


ACCOUNTS = [
    _account(1, "Petty Cash", AccountCategory.ASSET, "10.00"),
    _account(2, "Bank Loan", AccountCategory.LIABILITY, "500.00", ledger_id=2),
    _account(3, "Cash", AccountCategory.ASSET, None, entity_id="E2"),
    _account(4, "Sales", AccountCategory.REVENUE, "-20.00"),
]


def test_substring_versus_exact_match() -> None:
    """Substring matching is case-insensitive; exact requires equality."""
    records = [{"name": "Petty Cash"}, {"name": "Bank"}]

    assert filter_records(records, by_field("name", "cash")) == [records[0]]
    assert filter_records(records, by_field("name", "cash", exact=True)) == []
    assert filter_records(
        records,
        by_field("name", "petty cash", exact=True),
    ) == [records[0]]


def test_filter_preserves_order_and_does_not_mutate() -> None:
    """Matching records keep their relative order."""
    records = list(ACCOUNTS)

    result = filter_records(records, by_type("ASSET"))

    assert [account.id for account in result] == [1, 3]
    assert records == ACCOUNTS


def test_inactive_predicates_keep_everything() -> None:
    """None or empty filter values and empty ranges do not filter."""
    assert filter_records(ACCOUNTS, by_type(None)) == ACCOUNTS
    assert filter_records(ACCOUNTS, by_field("name", "")) == ACCOUNTS
    assert filter_records(ACCOUNTS, by_balance_range()) == ACCOUNTS


def test_missing_or_non_scalar_fields_never_match() -> None:
    """Records without the field, or with an object there, are dropped."""
    records = [{"name": {"first": "cash"}}, {"other": "cash"}, {"name": None}]

    assert filter_records(records, by_field("name", "cash")) == []


def test_values_match_coerces_numbers_and_strings() -> None:
    """Exact matches compare string forms when either side is text."""
    assert values_match(3, "3", exact=True)
    assert values_match(3, 3, exact=True)
    assert not values_match(3, 4, exact=True)
    assert values_match(12345, "234", exact=False)
    assert values_match(AccountCategory.ASSET, "asset", exact=True)
    assert not values_match(None, "x", exact=False)


def test_ledger_entity_and_currency_predicates() -> None:
    """Canonical attribute predicates match resolved values."""
    assert [a.id for a in filter_records(ACCOUNTS, by_ledger(2))] == [2]
    assert [a.id for a in filter_records(ACCOUNTS, by_entity("e2"))] == [3]
    assert len(filter_records(ACCOUNTS, by_currency("usd"))) == 4


def test_canonical_predicates_normalize_raw_records() -> None:
    """Raw account mappings are resolved before matching."""
    raw = [
        {"account_type": "asset", "enriched_ledger": {"ledger_id": 9}},
        {"type": "EXPENSE", "ledger_id": 9},
        "not a record",
    ]

    assert filter_records(raw, by_type(AccountCategory.ASSET)) == [raw[0]]
    assert filter_records(raw, by_ledger(9)) == raw[:2]


def test_balance_range_is_inclusive_and_skips_non_numeric() -> None:
    """Bounds are inclusive and N/A balances never match."""
    result = filter_records(ACCOUNTS, by_balance_range(Decimal("10"), 500))

    assert [account.id for account in result] == [1, 2]
    assert [
        account.id
        for account in filter_records(ACCOUNTS, by_balance_range(None, 0))
    ] == [4]


def test_apply_filters_tags_view_with_active_predicates() -> None:
    """Predicates compose as AND and become badges."""
    view = apply_filters(
        ACCOUNTS,
        [by_type("ASSET"), by_entity(None), by_field("name", "cash")],
    )

    assert isinstance(view, FilteredView)
    assert [account.id for account in view] == [1, 3]
    assert len(view) == 2
    assert view.badges == ["Type: ASSET", "name contains cash"]


def test_predicate_labels() -> None:
    """Labels describe the predicate for removable badges."""
    assert FieldPredicate("name", "x", exact=True).label == "name = x"
    assert by_type(AccountCategory.MEMO).label == "Type: MEMO"
    assert by_balance_range(1, 2).label == "Balance: 1 to 2"
    assert by_balance_range(1).label == "Balance >= 1"
    assert by_balance_range(None, 2).label == "Balance <= 2"


def test_account_criteria_build_predicates() -> None:
    """Account criteria combine into a drill-down view."""
    criteria = AccountFilterCriteria(account_type="ASSET", ledger_id=1)

    view = apply_filters(ACCOUNTS, criteria.predicates())

    assert [account.id for account in view] == [1, 3]
    assert view.badges == ["Type: ASSET", "Ledger: 1"]


def test_filter_by_model_type_for_ledgers_and_entities() -> None:
    """Ledger and entity records are filtered with their own resolvers."""
    ledgers = [
        {"ledger_id": 1, "r_entity": {"entity_id": "E1"}},
        {"ledger_id": 2, "entity": {"entity_id": "E2"}},
        {"ledger_id": 3, "entity_id": "E1", "r_currency": {"currency_code": "EUR"}},
    ]
    entities = [
        {"entity_id": "E1", "country_code": "US", "type": "COMPANY"},
        {"entity_id": "E2", "r_country": {"country_code": "FR"}},
    ]

    by_entity_view = filter_by_model_type(ledgers, {"entity_id": "E1"}, "ledger")
    by_currency_view = filter_by_model_type(
        ledgers,
        {"currency_code": "EUR", "unknown": 1},
        "ledger",
    )
    by_country_view = filter_by_model_type(
        entities,
        {"country_code": "fr"},
        "entity",
    )

    assert [ledger["ledger_id"] for ledger in by_entity_view] == [1, 3]
    assert [ledger["ledger_id"] for ledger in by_currency_view] == [3]
    assert [entity["entity_id"] for entity in by_country_view] == ["E2"]
    assert filter_records(ledgers, ledger_by_entity("E2")) == [ledgers[1]]


def test_filter_by_unknown_model_type_uses_generic_field() -> None:
    """Unknown model types fall back to field/value filters."""
    records = [{"code": "A1"}, {"code": "B2"}]

    view = filter_by_model_type(
        records,
        {"field": "code", "value": "b"},
        "transaction",
    )

    assert list(view) == [records[1]]


def test_search_records_over_fields_and_all_values() -> None:
    """Search is case-insensitive over strings and numbers."""
    records = [
        {"name": "Main Ledger", "ledger_id": 42, "active": True},
        {"name": "Side", "description": "holds CASH"},
    ]

    assert search_records(records, "") == records
    assert search_records(records, "cash") == [records[1]]
    assert search_records(records, "42") == [records[0]]
    assert search_records(records, "true") == []
    assert search_records(
        records,
        "main",
        get_search_fields("ledger"),
    ) == [records[0]]
    assert get_search_fields("unknown") == ()
