from typing import Any, List, Mapping

CRITERIA = ("sector", "stage", "location", "amount")
RECORD_KINDS = ("investor", "incubator")


def _is_bool(v: Any) -> bool:
    return isinstance(v, bool)


def validate_filters(data: Any) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    A filter set is a mapping of criterion name to bool; criteria that are
    left out count as switched off.
    """
    errors: List[str] = []

    if not isinstance(data, Mapping):
        errors.append(f"Filters must be a mapping, got {type(data).__name__}")
        return errors

    for key in data:
        if key not in CRITERIA:
            errors.append(
                f"Unknown filter criterion: {key!r} (expected one of {', '.join(CRITERIA)})"
            )
        elif not _is_bool(data[key]):
            errors.append(f"Filter '{key}' must be a bool")

    return errors


def validate_record_kind(kind: Any) -> List[str]:
    errors: List[str] = []
    if not isinstance(kind, str):
        errors.append(f"Record kind must be a string, got {type(kind).__name__}")
    elif kind not in RECORD_KINDS:
        errors.append(f"Record kind must be one of {', '.join(RECORD_KINDS)}, got {kind!r}")
    return errors
