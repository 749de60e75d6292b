import re
from typing import List, Optional, Tuple


def normalize_text(s: str) -> str:
    return " ".join(str(s).strip().lower().split())


STAGE_LADDER = ("pre-seed", "seed", "series a", "series b", "series c", "growth")
STAGE_LABELS = {
    "pre-seed": "Pre-Seed",
    "seed": "Seed",
    "series a": "Series A",
    "series b": "Series B",
    "series c": "Series C",
    "growth": "Growth",
}

# Order matters: "pre-seed" must be tried before the bare "seed" pattern.
STAGE_PATTERNS = [
    ("pre-seed", re.compile(r"pre[\s-]*seed|preseed")),
    ("seed", re.compile(r"seed")),
    ("series a", re.compile(r"series[\s-]*a\b")),
    ("series b", re.compile(r"series[\s-]*b\b")),
    ("series c", re.compile(r"series[\s-]*c\b")),
    ("growth", re.compile(r"growth|\blate\b|pre-ipo|\bipo\b")),
]

SHORT_STAGES = {"a": "series a", "b": "series b", "c": "series c"}


def normalize_stage(stage: str) -> str:
    """Map a free-text stage onto the ladder; unknown text comes back normalized."""
    s = normalize_text(stage)
    if not s:
        return ""
    if s in SHORT_STAGES:
        return SHORT_STAGES[s]
    for canonical, pattern in STAGE_PATTERNS:
        if pattern.search(s):
            return canonical
    return s


def stage_rank(stage: str) -> Optional[int]:
    canonical = normalize_stage(stage)
    if canonical in STAGE_LADDER:
        return STAGE_LADDER.index(canonical)
    return None


LIST_SEPARATORS = re.compile(r"[,;/|]+")


def split_list(value: str) -> List[str]:
    return [part.strip() for part in LIST_SEPARATORS.split(str(value)) if part.strip()]


def split_location(location: str) -> List[str]:
    return [normalize_text(part) for part in str(location).split(",") if part.strip()]


GLOBAL_LOCATIONS = {"global", "worldwide", "anywhere", "international"}


def is_global_location(location: str) -> bool:
    return normalize_text(location) in GLOBAL_LOCATIONS


MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "mn": 1_000_000,
    "million": 1_000_000,
    "b": 1_000_000_000,
    "bn": 1_000_000_000,
    "billion": 1_000_000_000,
}
_SUFFIX = r"(?:billion|million|thousand|bn|mn|b|m|k)"
_AMOUNT_RE = re.compile(r"(\d*\.?\d+)(" + _SUFFIX + r")?")
_CURRENCY_RE = re.compile(r"[\s,$€£₹]")
_RANGE_RE = re.compile(
    r"([$€£₹]?\s*\d[\d.,]*\s*" + _SUFFIX + r"?)\s*(?:-|–|—|\bto\b)\s*([$€£₹]?\s*\d[\d.,]*\s*" + _SUFFIX + r"?)"
)
_TRAILING_SUFFIX_RE = re.compile(r"(" + _SUFFIX + r")\s*$")
_UPPER_ONLY_RE = re.compile(r"\b(up\s*to|upto|max(?:imum)?|under|below|less\s+than)\b")
_LOWER_ONLY_RE = re.compile(r"\b(min(?:imum)?|at\s+least|over|above|more\s+than)\b|\+\s*$")


def parse_amount(amount: object) -> Optional[float]:
    """Parse "$1.5M", "500k", "2,000,000" or "3 million" into a number."""
    if amount is None or isinstance(amount, bool):
        return None
    if isinstance(amount, (int, float)):
        return float(amount) if amount > 0 else None
    s = _CURRENCY_RE.sub("", str(amount).lower())
    m = _AMOUNT_RE.search(s)
    if not m:
        return None
    value = float(m.group(1)) * MULTIPLIERS.get(m.group(2) or "", 1)
    return value if value > 0 else None


def parse_amount_range(text: object) -> Tuple[Optional[float], Optional[float]]:
    """
    Parse a ticket size or ask into (low, high). Either end may be None when
    the text only bounds one side ("up to $2M", "$500k+").
    """
    if text is None or isinstance(text, bool):
        return (None, None)
    if isinstance(text, (int, float)):
        value = parse_amount(text)
        return (value, value)

    s = str(text).lower()
    m = _RANGE_RE.search(s)
    if m:
        low_text, high_text = m.group(1), m.group(2)
        high_suffix = _TRAILING_SUFFIX_RE.search(high_text.strip())
        if high_suffix and not _TRAILING_SUFFIX_RE.search(low_text.strip()):
            # "1-2M" means one to two million
            low_text = low_text.strip() + high_suffix.group(1)
        low, high = parse_amount(low_text), parse_amount(high_text)
        if low is not None and high is not None and low > high:
            low, high = high, low
        return (low, high)

    value = parse_amount(s)
    if value is None:
        return (None, None)
    if _UPPER_ONLY_RE.search(s):
        return (None, value)
    if _LOWER_ONLY_RE.search(s):
        return (value, None)
    return (value, value)
