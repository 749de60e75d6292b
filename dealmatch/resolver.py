"""
Field Resolution for Investor and Incubator Records.

Responsibilities:
- Find each canonical attribute (name, partner, email, focus, stage,
  location, ticket size) in a record whose keys and shapes vary.
- Try aliases in priority order, then content heuristics.

Non-Responsibilities:
- No scoring.
- No validation or rejection of records.

Invariant:
Resolution never raises for bad data and never returns None for a text
attribute: anything that cannot be resolved comes back as "". The output is
a pure function of the record.
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from . import aliases as A
from .aliases import AliasTable, alias_table_for
from .heuristics import detect_email, detect_sectors, detect_stage, looks_like_name, person_from_email
from .logger import get_logger
from .models import ResolvedCandidate
from .normalize import parse_amount, parse_amount_range, split_list

logger = get_logger()

RESOLVED_ATTRIBUTES = (A.NAME, A.PARTNER, A.EMAIL, A.FOCUS, A.STAGE, A.LOCATION)

_TICKET_MIN_KEYS = ("min", "minimum", "min_ticket_size", "minticket", "min_ticket", "from", "low")
_TICKET_MAX_KEYS = ("max", "maximum", "max_ticket_size", "maxticket", "max_ticket", "to", "high")


def key_index(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Lower-cased key -> value. The first spelling of a key wins."""
    index: Dict[str, Any] = {}
    for key, value in record.items():
        index.setdefault(str(key).strip().lower(), value)
    return index


def as_list(value: Any) -> Optional[List[Any]]:
    """Lists stay lists; objects keyed "0", "1", ... are arrays stored as objects."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, Mapping) and value and all(str(k).isdigit() for k in value):
        return [value[k] for k in sorted(value, key=lambda k: int(k))]
    return None


def flatten(value: Any) -> str:
    """Render any record value as text; nested values join with ", "."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    items = as_list(value)
    if items is None and isinstance(value, Mapping):
        items = list(value.values())
    if items is not None:
        return ", ".join(part for part in (flatten(v) for v in items) if part)
    return str(value).strip()


def lookup_value(
    index: Mapping[str, Any],
    keys: Iterable[str],
    accept: Optional[Callable[[str], bool]] = None,
) -> Any:
    """Raw value of the first alias that holds something non-blank."""
    for key in keys:
        if key.lower() not in index:
            continue
        value = index[key.lower()]
        text = flatten(value)
        if text and (accept is None or accept(text)):
            return value
    return None


def lookup_text(
    index: Mapping[str, Any],
    keys: Iterable[str],
    accept: Optional[Callable[[str], bool]] = None,
) -> str:
    return flatten(lookup_value(index, keys, accept))


def string_values(record: Mapping[str, Any]) -> List[str]:
    return [v.strip() for v in record.values() if isinstance(v, str) and v.strip()]


def _unique(parts: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for part in parts:
        if part and part not in seen:
            seen.add(part)
            result.append(part)
    return result


def _full_name(index: Mapping[str, Any], table: AliasTable) -> str:
    first = lookup_text(index, table[A.FIRST_NAME])
    last = lookup_text(index, table[A.LAST_NAME])
    return " ".join(p for p in (first, last) if p)


def resolve_name(index: Mapping[str, Any], record: Mapping[str, Any], table: AliasTable) -> str:
    """Firm alias, then a person name, then the first short text value."""
    name = lookup_text(index, table[A.NAME])
    if name:
        return name
    name = _full_name(index, table) or lookup_text(index, table[A.CONTACT_PERSON], accept=lambda s: "@" not in s)
    if name:
        return name
    for value in string_values(record):
        if looks_like_name(value):
            return value
    return ""


def resolve_email(index: Mapping[str, Any], record: Mapping[str, Any], table: AliasTable) -> str:
    email = lookup_text(index, table[A.EMAIL])
    if email:
        return email
    for value in string_values(record):
        found = detect_email(value)
        if found:
            return found
    return ""


def resolve_partner(index: Mapping[str, Any], table: AliasTable, email: str) -> str:
    # A contact column holding an address is not a person name.
    partner = lookup_text(index, table[A.PARTNER], accept=lambda s: "@" not in s)
    if partner:
        return partner
    full = _full_name(index, table)
    if full:
        return full
    return person_from_email(email) or ""


def resolve_focus(index: Mapping[str, Any], table: AliasTable) -> Tuple[str, ...]:
    raw = lookup_value(index, table[A.FOCUS])
    if raw is not None:
        items = as_list(raw)
        if items is not None:
            return tuple(text for text in (flatten(v) for v in items) if text)
        return tuple(split_list(flatten(raw)))
    text = ", ".join(_unique(flatten(index[k.lower()]) for k in table[A.DESCRIPTION] if k.lower() in index))
    return tuple(detect_sectors(text))


def resolve_stage(index: Mapping[str, Any], record: Mapping[str, Any], table: AliasTable) -> str:
    stage = lookup_text(index, table[A.STAGE])
    if stage:
        return stage
    return detect_stage(" ".join(string_values(record))) or ""


def resolve_location(index: Mapping[str, Any], table: AliasTable) -> str:
    parts = [
        lookup_text(index, table[A.CITY]),
        lookup_text(index, table[A.STATE]),
        lookup_text(index, table[A.COUNTRY]),
        lookup_text(index, table[A.LOCATION]),
    ]
    return ", ".join(_unique(parts))


def _amount_from(sub: Mapping[str, Any], keys: Iterable[str]) -> Optional[float]:
    return parse_amount(lookup_value(key_index(sub), keys))


def resolve_ticket(index: Mapping[str, Any], table: AliasTable) -> Tuple[Optional[float], Optional[float]]:
    raw = lookup_value(index, table[A.TICKET])
    low: Optional[float] = None
    high: Optional[float] = None
    items = as_list(raw) if raw is not None else None
    if isinstance(raw, Mapping) and items is None:
        low, high = _amount_from(raw, _TICKET_MIN_KEYS), _amount_from(raw, _TICKET_MAX_KEYS)
    elif items is not None and len(items) == 2:
        low, high = parse_amount(items[0]), parse_amount(items[1])
    elif raw is not None:
        low, high = parse_amount_range(raw if isinstance(raw, (int, float)) else flatten(raw))

    if low is None:
        low = parse_amount(lookup_text(index, table[A.TICKET_MIN]))
    if high is None:
        high = parse_amount(lookup_text(index, table[A.TICKET_MAX]))
    if low is not None and high is not None and low > high:
        low, high = high, low
    return (low, high)


def resolve(
    record: Mapping[str, Any],
    kind: str = "investor",
    aliases: Optional[AliasTable] = None,
) -> ResolvedCandidate:
    """Resolve one raw investor/incubator record into its canonical view."""
    table = alias_table_for(kind)
    if aliases is not None:
        # Caller tables override per attribute; the rest keep the defaults.
        table = {**table, **aliases}
    if not isinstance(record, Mapping):
        logger.warning("Record is not a mapping; resolving as empty", type=type(record).__name__)
        record = {}

    index = key_index(record)
    email = resolve_email(index, record, table)
    ticket_min, ticket_max = resolve_ticket(index, table)
    candidate = ResolvedCandidate(
        display_name=resolve_name(index, record, table),
        partner_name=resolve_partner(index, table, email),
        email=email,
        focus_sectors=resolve_focus(index, table),
        stage=resolve_stage(index, record, table),
        location=resolve_location(index, table),
        ticket_min=ticket_min,
        ticket_max=ticket_max,
        kind=kind,
    )

    unresolved = tuple(
        name for name, value in (
            (A.NAME, candidate.display_name),
            (A.PARTNER, candidate.partner_name),
            (A.EMAIL, candidate.email),
            (A.FOCUS, candidate.focus_sectors),
            (A.STAGE, candidate.stage),
            (A.LOCATION, candidate.location),
        ) if not value
    )
    logger.record_resolved(unresolved)
    if unresolved:
        logger.debug("Record has unresolved attributes", name=candidate.display_name, unresolved=list(unresolved))
    return candidate


def resolve_all(records: Iterable[Mapping[str, Any]], kind: str = "investor") -> List[ResolvedCandidate]:
    alias_table_for(kind)  # reject a bad kind even for an empty batch
    return [resolve(record, kind) for record in records]
