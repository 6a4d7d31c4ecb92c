"""Streamlit dashboard entry point."""

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

import streamlit as st
import altair as alt

from src.application.use_cases.drill_down_accounts import (
    DrillDownAccountsUseCase,
)
from src.application.use_cases.get_ledger_statement import (
    GetLedgerStatementUseCase,
    LedgerStatementView,
)
from src.application.use_cases.refresh_dashboard import (
    DashboardSnapshot,
    RefreshSequencer,
)
from src.domain.constants import CATEGORY_LABELS, AccountCategory
from src.domain.models import (
    CanonicalAccount,
    CategoryAmount,
    EntityAccountCount,
    RatioSet,
    RawLedgerRecord,
    Statement,
)
from src.domain.services.filters import AccountFilterCriteria, FilteredView
from src.domain.services.finance import (
    compute_category_breakdown,
    count_accounts_by_entity,
)
from src.domain.services.ratios import format_ratio
from src.domain.services.resolution import (
    UNRESOLVED,
    path_accessor,
    resolve_first,
)
from src.domain.services.scaling import format_amount
from src.domain.services.validation import MalformedRecordsError
from src.infrastructure.container import build_refresh_use_case, build_settings
from src.infrastructure.ledger_api import LedgerApiError
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger


ALL_OPTION = "All"
EMPTY_CELL = "-"

_LEDGER_ID = (path_accessor("ledger_id"),)
_LEDGER_NAME = (path_accessor("name"),)


@st.cache_resource
def _get_sequencer() -> RefreshSequencer:
    """Sequencer shared by every session of the server process."""
    return RefreshSequencer()


def _fetch_snapshot() -> DashboardSnapshot | None:
    """Run one sequenced refresh against the ledger API."""
    use_case = build_refresh_use_case(sequencer=_get_sequencer())
    return use_case.execute()


def _load_snapshot() -> DashboardSnapshot | None:
    """Refresh, falling back to the last published snapshot on failure."""
    try:
        snapshot = _fetch_snapshot()
    except (LedgerApiError, MalformedRecordsError) as exc:
        get_app_logger().error(f"Dashboard refresh failed: {exc}")
        st.error(f"Could not load ledger data: {exc}")
        snapshot = None
    return snapshot or _get_sequencer().snapshot


def _refresh_due(
    snapshot: DashboardSnapshot | None,
    period_seconds: int,
    now: datetime,
) -> bool:
    """Return True when the snapshot is older than the refresh period."""
    if period_seconds <= 0:
        return False
    if snapshot is None:
        return True
    age = (now - snapshot.refreshed_at).total_seconds()
    return age >= period_seconds


def _render_auto_refresh(period_seconds: int, shown_token: int) -> None:
    """Poll on a timer and rerun the app once a newer snapshot exists."""

    @st.fragment(run_every=period_seconds)
    def _poll() -> None:
        sequencer = _get_sequencer()
        now = datetime.now(timezone.utc)
        if _refresh_due(sequencer.snapshot, period_seconds, now):
            _load_snapshot()
        latest = sequencer.snapshot
        if latest is not None and latest.token != shown_token:
            st.rerun()

    _poll()


def _ledger_options(
    ledgers: Iterable[RawLedgerRecord],
    accounts: Iterable[CanonicalAccount],
) -> list[tuple[Any, str]]:
    """Return ``(ledger_id, label)`` pairs for the ledger selector.

    Ledgers referenced by accounts but missing from the ledger list are
    appended with their id as label.
    """
    options: list[tuple[Any, str]] = []
    seen: set[str] = set()
    for ledger in ledgers:
        ledger_id = resolve_first(ledger, _LEDGER_ID)
        if ledger_id is UNRESOLVED or str(ledger_id) in seen:
            continue
        name = resolve_first(ledger, _LEDGER_NAME)
        label = f"{ledger_id}" if name is UNRESOLVED else f"{name} ({ledger_id})"
        options.append((ledger_id, label))
        seen.add(str(ledger_id))
    for account in accounts:
        if account.ledger_id is None or str(account.ledger_id) in seen:
            continue
        options.append((account.ledger_id, f"{account.ledger_id}"))
        seen.add(str(account.ledger_id))
    return options


def _format_money(value, currency_code: str | None, places: int = 2) -> str:
    """Format an amount with its currency code."""
    formatted = format_amount(value, places=places)
    return f"{formatted} {currency_code}" if currency_code else formatted


def _statement_rows(statement: Statement) -> list[dict[str, str]]:
    """Rows of the statement table, in balance-sheet then income order."""
    currency_code = statement.currency_code
    rows = [
        {
            "Line": CATEGORY_LABELS[category],
            "Amount": _format_money(amount, currency_code),
        }
        for category, amount in statement.totals.items()
    ]
    rows.append(
        {
            "Line": "Net income",
            "Amount": _format_money(statement.net_income, currency_code),
        }
    )
    rows.append(
        {
            "Line": "Total equity",
            "Amount": _format_money(statement.total_equity, currency_code),
        }
    )
    return rows


def _ratio_rows(ratios: RatioSet) -> list[dict[str, str]]:
    """Rows of the ratios table, rounded to two places."""
    return [
        {"Ratio": "Current ratio", "Value": format_ratio(ratios.current_ratio)},
        {
            "Ratio": "Debt to equity",
            "Value": format_ratio(ratios.debt_to_equity_ratio),
        },
        {
            "Ratio": "Net margin",
            "Value": format_ratio(ratios.net_margin, suffix="%"),
        },
    ]


def _account_rows(
    accounts: Sequence[CanonicalAccount],
) -> list[dict[str, str]]:
    """Rows of an accounts table."""
    return [
        {
            "Name": account.name or "Unnamed Account",
            "ID": EMPTY_CELL if account.id is None else str(account.id),
            "Type": account.category.value,
            "Currency": account.currency.code,
            "Balance": format_amount(
                account.decimal_balance,
                places=account.currency.scale,
            ),
            "Ledger": EMPTY_CELL
            if account.ledger_id is None
            else str(account.ledger_id),
            "Entity": EMPTY_CELL
            if account.entity_id is None
            else str(account.entity_id),
        }
        for account in accounts
    ]


def _prepare_category_chart_data(
    breakdown: Sequence[CategoryAmount],
) -> list[dict[str, str | float | int]]:
    """Altair-ready rows for the category bar chart."""
    return [
        {
            "category": CATEGORY_LABELS[item.category],
            "amount": float(item.amount),
            "amount_label": format_amount(item.amount, places=2),
            "accounts": item.account_count,
        }
        for item in breakdown
    ]


def _prepare_entity_chart_data(
    counts: Sequence[EntityAccountCount],
) -> list[dict[str, str | int]]:
    """Altair-ready rows for the entity distribution chart."""
    return [
        {"entity": item.name, "accounts": item.account_count}
        for item in counts
    ]


def _render_filtered_view(view: FilteredView, empty_message: str) -> None:
    """Render badges and the table of a filtered view."""
    if view.badges:
        st.caption(" · ".join(f"[{badge}]" for badge in view.badges))
    st.caption(f"{len(view)} accounts shown")
    if not view.records:
        st.info(empty_message)
        return
    st.dataframe(
        _account_rows(view.records),
        width="stretch",
        hide_index=True,
    )


def _render_statement(
    snapshot: DashboardSnapshot,
    ledger_id: Any,
    use_case: GetLedgerStatementUseCase,
    drill_down: DrillDownAccountsUseCase,
) -> None:
    """Render the statement, ratios and drill-down of one ledger."""
    view: LedgerStatementView = use_case.summarize(snapshot.accounts, ledger_id)
    statement = view.statement
    currency_code = statement.currency_code

    assets_col, liabilities_col, equity_col = st.columns(3)
    assets_col.metric(
        "Assets",
        _format_money(statement.asset_total, currency_code),
    )
    liabilities_col.metric(
        "Liabilities",
        _format_money(statement.liability_total, currency_code),
    )
    equity_col.metric(
        "Total equity",
        _format_money(statement.total_equity, currency_code),
    )

    statement_col, ratios_col = st.columns(2)
    with statement_col:
        st.subheader("Statement")
        st.dataframe(_statement_rows(statement), hide_index=True)
        if statement.skipped_count:
            st.caption(
                f"{statement.skipped_count} accounts with a non-numeric "
                "balance are not included."
            )
    with ratios_col:
        st.subheader("Ratios")
        st.dataframe(_ratio_rows(view.ratios), hide_index=True)

    st.subheader("Drill-down")
    category = st.selectbox(
        "Category",
        options=[category.value for category in AccountCategory],
        format_func=lambda value: CATEGORY_LABELS[AccountCategory(value)],
    )
    filtered = drill_down.by_category(view.accounts, category, ledger_id)
    _render_filtered_view(filtered, "No accounts found for this type.")


def _render_accounts(
    snapshot: DashboardSnapshot,
    drill_down: DrillDownAccountsUseCase,
) -> None:
    """Render the accounts table with filters and badges."""
    accounts = snapshot.accounts
    query = st.text_input("Search", placeholder="Name, id, type or currency")
    type_col, entity_col, currency_col = st.columns(3)
    account_type = type_col.selectbox(
        "Type",
        options=[ALL_OPTION] + [category.value for category in AccountCategory],
    )
    entity_ids = sorted(
        {str(acc.entity_id) for acc in accounts if acc.entity_id is not None}
    )
    entity_id = entity_col.selectbox("Entity", options=[ALL_OPTION] + entity_ids)
    currency_codes = sorted({acc.currency.code for acc in accounts})
    currency_code = currency_col.selectbox(
        "Currency",
        options=[ALL_OPTION] + currency_codes,
    )
    min_col, max_col = st.columns(2)
    min_balance = min_col.number_input("Min balance", value=None)
    max_balance = max_col.number_input("Max balance", value=None)

    criteria = AccountFilterCriteria(
        account_type=None if account_type == ALL_OPTION else account_type,
        entity_id=None if entity_id == ALL_OPTION else entity_id,
        currency_code=None if currency_code == ALL_OPTION else currency_code,
        min_balance=min_balance,
        max_balance=max_balance,
    )
    view = drill_down.execute(accounts, criteria, query=query.strip() or None)
    _render_filtered_view(view, "No accounts match the filters.")


def _render_analytics(snapshot: DashboardSnapshot) -> None:
    """Render the category breakdown and entity distribution charts."""
    breakdown = compute_category_breakdown(snapshot.accounts)
    if not breakdown:
        st.info("No account balances available for the charts.")
        return
    st.subheader("Account Type Breakdown")
    bars = alt.Chart(
        alt.Data(values=_prepare_category_chart_data(breakdown))
    ).mark_bar(color="#3B82F6").encode(
        x=alt.X("category:N", sort=None, title=None),
        y=alt.Y("amount:Q", title="Amount"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("accounts:Q"),
        ],
    )
    st.altair_chart(bars, width="stretch")

    counts = count_accounts_by_entity(snapshot.accounts, snapshot.entities)
    if not counts:
        return
    st.subheader("Entity Distribution")
    donut = alt.Chart(
        alt.Data(values=_prepare_entity_chart_data(counts))
    ).mark_arc(innerRadius=80).encode(
        theta=alt.Theta("accounts:Q"),
        color=alt.Color("entity:N", legend=alt.Legend(orient="bottom")),
        tooltip=[alt.Tooltip("entity:N"), alt.Tooltip("accounts:Q")],
    )
    st.altair_chart(donut, width="stretch")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Ledger Dashboard", layout="wide")
    st.title("Ledger Dashboard")

    settings = build_settings()
    page = st.sidebar.selectbox("Page", ["Statements", "Accounts", "Analytics"])
    get_usage_logger().info(f"Page viewed: {page}")

    snapshot = _get_sequencer().snapshot
    if st.sidebar.button("Refresh now") or snapshot is None:
        snapshot = _load_snapshot()
    if snapshot is None:
        st.warning("No ledger data available. Check the ledger API settings.")
        return

    st.sidebar.caption(
        f"Updated {snapshot.refreshed_at:%Y-%m-%d %H:%M:%S} UTC"
    )
    auto_refresh = st.sidebar.toggle(
        "Auto-refresh",
        value=settings.auto_refresh_seconds > 0,
    )
    if auto_refresh and settings.auto_refresh_seconds > 0:
        _render_auto_refresh(settings.auto_refresh_seconds, snapshot.token)

    drill_down = DrillDownAccountsUseCase(
        currency_defaults=settings.currency_defaults,
    )
    if page == "Statements":
        options = _ledger_options(snapshot.ledgers, snapshot.accounts)
        if not options:
            st.warning("No ledgers found.")
            return
        labels = {str(ledger_id): label for ledger_id, label in options}
        selected = st.sidebar.selectbox(
            "Ledger",
            options=[ledger_id for ledger_id, _ in options],
            format_func=lambda ledger_id: labels[str(ledger_id)],
        )
        get_usage_logger().info(f"Ledger selected: {selected}")
        _render_statement(
            snapshot,
            selected,
            GetLedgerStatementUseCase(
                currency_defaults=settings.currency_defaults,
            ),
            drill_down,
        )
    elif page == "Accounts":
        st.subheader("Accounts")
        _render_accounts(snapshot, drill_down)
    else:
        _render_analytics(snapshot)


if __name__ == "__main__":  # pragma: no cover
    main()
