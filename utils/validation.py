"""
Input validation for the OS Resource Policy Simulator.

Every engine entry point validates its workload before simulating and fails
fast with InvalidInput naming the offending field.
"""

from typing import Any, Iterable, List, Sequence


class InvalidInput(ValueError):
    """
    Raised when a workload description violates an engine precondition.

    Attributes:
        field: Name of the offending workload field (e.g. "burst_time")
        detail: Human-readable reason
    """

    def __init__(self, field: str, detail: str):
        self.field = field
        self.detail = detail
        super().__init__(f"Invalid {field}: {detail}")


def require_int(field: str, value: Any) -> int:
    """Reject booleans, floats and strings masquerading as integers."""
    if isinstance(value, bool) or not isinstance(value, int):
        # numpy integers are accepted and normalised
        if hasattr(value, "dtype") and getattr(value.dtype, "kind", "") in "iu":
            return int(value)
        raise InvalidInput(field, f"expected an integer, got {value!r}")
    return value


def require_positive(field: str, value: Any) -> int:
    """Validate an integer > 0."""
    value = require_int(field, value)
    if value <= 0:
        raise InvalidInput(field, f"must be positive (got {value})")
    return value


def require_non_negative(field: str, value: Any) -> int:
    """Validate an integer >= 0."""
    value = require_int(field, value)
    if value < 0:
        raise InvalidInput(field, f"cannot be negative (got {value})")
    return value


def require_int_list(field: str, values: Iterable[Any], non_negative: bool = True) -> List[int]:
    """
    Validate a flat sequence of integers.

    Args:
        field: Field name reported on failure
        values: Sequence to validate
        non_negative: Reject negative entries when True

    Returns:
        A new list of plain ints
    """
    if values is None or isinstance(values, (str, bytes)):
        raise InvalidInput(field, f"expected a sequence of integers, got {values!r}")

    result = []
    for index, value in enumerate(values):
        item_field = f"{field}[{index}]"
        if non_negative:
            result.append(require_non_negative(item_field, value))
        else:
            result.append(require_int(item_field, value))
    return result


def require_matrix(field: str, rows: Sequence[Sequence[Any]], num_rows: int, num_cols: int) -> List[List[int]]:
    """
    Validate a P x R matrix of non-negative integers.

    Raises:
        InvalidInput: If the shape differs from (num_rows, num_cols) or an entry is invalid
    """
    if rows is None or isinstance(rows, (str, bytes)):
        raise InvalidInput(field, "expected a matrix (sequence of rows)")
    if len(rows) != num_rows:
        raise InvalidInput(field, f"expected {num_rows} rows, got {len(rows)}")

    matrix = []
    for i, row in enumerate(rows):
        values = require_int_list(f"{field}[{i}]", row)
        if len(values) != num_cols:
            raise InvalidInput(
                f"{field}[{i}]",
                f"expected {num_cols} columns, got {len(values)}"
            )
        matrix.append(values)
    return matrix


def require_member(field: str, value: Any, enum_type):
    """
    Coerce a policy selector into a member of a closed enum.

    Accepts an enum member, its value, or its name (case-insensitive).
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        for member in enum_type:
            if token in (str(member.value).lower(), member.name.lower()):
                return member
    choices = ", ".join(str(m.value) for m in enum_type)
    raise InvalidInput(field, f"unknown value {value!r} (choose from: {choices})")
