"""Ordered field resolution over schema-loose API records.

The ledger API returns the same fact at several optional locations. Each
logical attribute has an ordered tuple of accessors; the first accessor that
yields a present (non-None) value wins. When no accessor matches, the
``UNRESOLVED`` marker is returned and callers apply their own default.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from src.domain.constants import UNRESOLVED
from src.domain.models.accounts import CurrencyDefaults, CurrencyDescriptor


Accessor = Callable[[Any], Any]

MISSING = object()

_SCALARS = (str, bytes, int, float, list, tuple)


def get_path(record: Any, path: str) -> Any:
    """Walk a dotted path through mappings and object attributes.

    Args:
        record: Raw mapping or canonical object.
        path: Dotted path such as ``enriched_ledger.ledger_id``.

    Returns:
        Any: The value at the path, or ``MISSING`` when a segment is absent.
    """
    value = record
    for segment in path.split("."):
        if value is None:
            return MISSING
        if isinstance(value, Mapping):
            if segment not in value:
                return MISSING
            value = value[segment]
        elif not isinstance(value, _SCALARS) and hasattr(value, segment):
            value = getattr(value, segment)
        else:
            return MISSING
    return value


def path_accessor(path: str) -> Accessor:
    """Return an accessor reading ``path``; absent values read as None."""

    def _access(record: Any) -> Any:
        value = get_path(record, path)
        return None if value is MISSING else value

    _access.__name__ = f"path:{path}"
    return _access


def mapping_accessor(path: str) -> Accessor:
    """Return an accessor reading ``path`` only when it holds a mapping."""
    read = path_accessor(path)

    def _access(record: Any) -> Any:
        value = read(record)
        return value if isinstance(value, Mapping) else None

    _access.__name__ = f"mapping:{path}"
    return _access


def resolve_first(record: Any, accessors: Sequence[Accessor]) -> Any:
    """Return the first present value produced by ``accessors``.

    Args:
        record: Raw record to probe.
        accessors: Accessors in resolution order.

    Returns:
        Any: First non-None value, or ``UNRESOLVED``.
    """
    for accessor in accessors:
        value = accessor(record)
        if value is not None:
            return value
    return UNRESOLVED


ACCOUNT_TYPE_ACCESSORS: tuple[Accessor, ...] = (
    path_accessor("account_type"),
    path_accessor("type"),
    path_accessor("account_code.type"),
    path_accessor("code.type"),
)

CURRENCY_ACCESSORS: tuple[Accessor, ...] = (
    mapping_accessor("r_currency"),
    mapping_accessor("currency"),
    mapping_accessor("ledger.r_currency"),
    mapping_accessor("enriched_ledger.r_currency"),
)

CURRENCY_CODE_FALLBACK_ACCESSORS: tuple[Accessor, ...] = (
    path_accessor("currency_code"),
)

LEDGER_ID_ACCESSORS: tuple[Accessor, ...] = (
    path_accessor("ledger_id"),
    path_accessor("enriched_ledger.ledger_id"),
)

ENTITY_ID_ACCESSORS: tuple[Accessor, ...] = (
    path_accessor("entity_id"),
    path_accessor("enriched_ledger.entity_id"),
    path_accessor("entity.entity_id"),
)

ACCOUNT_ID_ACCESSORS: tuple[Accessor, ...] = (
    path_accessor("account_id"),
    path_accessor("account_extra_id"),
)

LEDGER_ENTITY_ID_ACCESSORS: tuple[Accessor, ...] = (
    path_accessor("r_entity.entity_id"),
    path_accessor("entity.entity_id"),
    path_accessor("entity_id"),
)

LEDGER_CURRENCY_CODE_ACCESSORS: tuple[Accessor, ...] = (
    path_accessor("r_currency.currency_code"),
    path_accessor("currency_code"),
)

ENTITY_COUNTRY_CODE_ACCESSORS: tuple[Accessor, ...] = (
    path_accessor("country_code"),
    path_accessor("r_country.country_code"),
)

ENTITY_TYPE_ACCESSORS: tuple[Accessor, ...] = (
    path_accessor("type"),
    path_accessor("entity_type"),
)

_CURRENCY_CODE_KEYS = ("currency_code", "code")


def resolve_account_type(record: Any) -> Any:
    """Return the raw account type string or ``UNRESOLVED``."""
    return resolve_first(record, ACCOUNT_TYPE_ACCESSORS)


def resolve_ledger_id(record: Any) -> Any:
    """Return the owning ledger id or ``UNRESOLVED``."""
    return resolve_first(record, LEDGER_ID_ACCESSORS)


def resolve_entity_id(record: Any) -> Any:
    """Return the owning entity id or ``UNRESOLVED``."""
    return resolve_first(record, ENTITY_ID_ACCESSORS)


def resolve_account_id(record: Any) -> Any:
    """Return the account id or ``UNRESOLVED``."""
    return resolve_first(record, ACCOUNT_ID_ACCESSORS)


def resolve_currency(
    record: Any,
    defaults: CurrencyDefaults | None = None,
) -> CurrencyDescriptor | Any:
    """Resolve the currency descriptor of an account record.

    Currency objects are probed first. A bare ``currency_code`` string is the
    last resort and always carries the default scale.

    Args:
        record: Raw account record.
        defaults: Fallback code and scale.

    Returns:
        CurrencyDescriptor | Any: Descriptor, or ``UNRESOLVED`` when the
        record carries no currency information at all.
    """
    defaults = defaults or CurrencyDefaults()
    currency = resolve_first(record, CURRENCY_ACCESSORS)
    if currency is not UNRESOLVED:
        return CurrencyDescriptor(
            code=_currency_code(currency, defaults),
            scale=_currency_scale(currency, defaults),
        )
    code = resolve_first(record, CURRENCY_CODE_FALLBACK_ACCESSORS)
    if isinstance(code, str):
        return CurrencyDescriptor(code=code, scale=defaults.scale)
    return UNRESOLVED


def resolve_currency_or_default(
    record: Any,
    defaults: CurrencyDefaults | None = None,
) -> CurrencyDescriptor:
    """Resolve the currency descriptor, falling back to ``defaults``."""
    defaults = defaults or CurrencyDefaults()
    currency = resolve_currency(record, defaults)
    if currency is UNRESOLVED:
        return CurrencyDescriptor(code=defaults.code, scale=defaults.scale)
    return currency


def _currency_code(currency: Mapping, defaults: CurrencyDefaults) -> str:
    for key in _CURRENCY_CODE_KEYS:
        value = currency.get(key)
        if isinstance(value, str):
            return value
    return defaults.code


def _currency_scale(currency: Mapping, defaults: CurrencyDefaults) -> int:
    scale = currency.get("scale")
    if isinstance(scale, bool) or not isinstance(scale, int) or scale < 0:
        return defaults.scale
    return scale


__all__ = [
    "Accessor",
    "MISSING",
    "get_path",
    "path_accessor",
    "mapping_accessor",
    "resolve_first",
    "ACCOUNT_TYPE_ACCESSORS",
    "CURRENCY_ACCESSORS",
    "LEDGER_ID_ACCESSORS",
    "ENTITY_ID_ACCESSORS",
    "ACCOUNT_ID_ACCESSORS",
    "LEDGER_ENTITY_ID_ACCESSORS",
    "LEDGER_CURRENCY_CODE_ACCESSORS",
    "ENTITY_COUNTRY_CODE_ACCESSORS",
    "ENTITY_TYPE_ACCESSORS",
    "resolve_account_type",
    "resolve_ledger_id",
    "resolve_entity_id",
    "resolve_account_id",
    "resolve_currency",
    "resolve_currency_or_default",
]
