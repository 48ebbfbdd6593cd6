"""Change detection between two versions of a contribution."""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from fintrxn.domain.entities import RecordState

ChangeSet = frozenset


def _normalize(value: Any) -> Any:
    """Normalize a field value for loose comparison."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return value
    else:
        return str(value)
    # NaN never equals itself and sNaN refuses to compare, keep those as text
    return number if number.is_finite() else str(value).strip()


def loosely_equal(left: Any, right: Any) -> bool:
    """Compare two field values the way the host does.

    Empty string and None are equal, numbers equal their numeric strings
    ("100" == 100 == "100.00") and dates equal their ISO strings.
    """
    return _normalize(left) == _normalize(right)


def merge_states(old: RecordState, supplied: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay the supplied fields on the old state.

    None in ``supplied`` means "not supplied", never "clear this field".
    """
    merged = dict(old)
    for key, value in supplied.items():
        if value is not None:
            merged[key] = value
    for key, value in old.items():
        merged.setdefault(key, value)
    return merged


def compute_changes(
    old: RecordState, supplied: Mapping[str, Any]
) -> tuple[dict[str, Any], ChangeSet]:
    """Merge the supplied fields into the old state and diff the result.

    Returns:
        Tuple of (merged new state, names of the fields that changed)
    """
    new = merge_states(old, supplied)
    changes = ChangeSet(key for key, value in new.items() if not loosely_equal(value, old.get(key)))
    return new, changes
