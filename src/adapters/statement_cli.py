"""CLI adapter printing ledger statements and ratios.

Set ``STATEMENT_LEDGER_ID`` to print one ledger; otherwise every ledger
found in the account records is printed.
"""

import os

from src.application.use_cases.get_canonical_accounts import (
    GetCanonicalAccountsUseCase,
)
from src.application.use_cases.get_ledger_statement import (
    GetLedgerStatementUseCase,
    LedgerStatementView,
)
from src.domain.constants import CATEGORY_LABELS
from src.domain.services.ratios import format_ratio
from src.domain.services.scaling import format_amount
from src.domain.services.validation import MalformedRecordsError
from src.infrastructure.container import build_records_source, build_settings
from src.infrastructure.ledger_api import LedgerApiError
from src.infrastructure.logging.logger import get_app_logger


def format_statement(view: LedgerStatementView) -> list[str]:
    """Return the printable lines of one ledger statement."""
    statement = view.statement
    currency = f" {statement.currency_code}" if statement.currency_code else ""
    lines = [f"Ledger {view.ledger_id} ({statement.account_count} accounts)"]
    for category, amount in statement.totals.items():
        label = CATEGORY_LABELS[category]
        lines.append(f"  {label:<14}{format_amount(amount, places=2)}{currency}")
    lines.append(
        f"  {'Net income':<14}"
        f"{format_amount(statement.net_income, places=2)}{currency}"
    )
    lines.append(
        f"  {'Total equity':<14}"
        f"{format_amount(statement.total_equity, places=2)}{currency}"
    )
    lines.append(
        f"  Current ratio: {format_ratio(view.ratios.current_ratio)} | "
        f"Debt to equity: {format_ratio(view.ratios.debt_to_equity_ratio)} | "
        f"Net margin: {format_ratio(view.ratios.net_margin, suffix='%')}"
    )
    if statement.skipped_count:
        lines.append(
            f"  ({statement.skipped_count} accounts with a non-numeric "
            "balance left out)"
        )
    return lines


def main() -> None:
    """Print statements for one ledger or for every ledger."""
    logger = get_app_logger()
    settings = build_settings()
    records_source = build_records_source(settings)
    statements = GetLedgerStatementUseCase(
        records_source=records_source,
        currency_defaults=settings.currency_defaults,
        logger=logger,
    )
    ledger_id = os.getenv("STATEMENT_LEDGER_ID", "").strip()

    try:
        if ledger_id:
            views = [statements.execute(ledger_id)]
        else:
            accounts = GetCanonicalAccountsUseCase(
                records_source,
                currency_defaults=settings.currency_defaults,
                logger=logger,
            ).execute()
            ledger_ids = list(
                dict.fromkeys(
                    account.ledger_id
                    for account in accounts
                    if account.ledger_id is not None
                )
            )
            views = [
                statements.summarize(accounts, ledger)
                for ledger in ledger_ids
            ]
    except (LedgerApiError, MalformedRecordsError) as exc:
        logger.error(f"Statement CLI failed: {exc}")
        print(f"Could not load ledger data: {exc}")
        return

    if not views:
        print("No ledgers found.")
        return
    for view in views:
        print("\n".join(format_statement(view)))


if __name__ == "__main__":  # pragma: no cover
    main()
