"""Account category classification."""

from typing import Any

from src.domain.constants import AccountCategory


_CATEGORIES_BY_NAME = {category.value: category for category in AccountCategory}


def classify(account_type: Any) -> AccountCategory:
    """Map a resolved account type onto the closed category set.

    Args:
        account_type: Resolved type string, ``UNRESOLVED`` or any other
            value found in the record.

    Returns:
        AccountCategory: Matching category, ``OTHER`` for anything unknown.
    """
    if not isinstance(account_type, str):
        return AccountCategory.OTHER
    return _CATEGORIES_BY_NAME.get(
        account_type.strip().upper(),
        AccountCategory.OTHER,
    )


__all__ = ["classify"]
