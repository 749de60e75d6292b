"""
Content heuristics used when no alias matches.

Each heuristic is a pure function over a single string so it can be tested
on its own; the resolver decides which text to feed in.
"""

import re
from typing import List, Optional

from .normalize import STAGE_LABELS, STAGE_PATTERNS

MAX_EMAIL_LENGTH = 120
MAX_NAME_LENGTH = 40

SECTOR_VOCABULARY = {
    "fintech": "FinTech",
    "saas": "SaaS",
    "healthcare": "Healthcare",
    "healthtech": "HealthTech",
    "ai": "AI",
    "ml": "ML",
    "edtech": "EdTech",
    "ecommerce": "E-commerce",
    "e-commerce": "E-commerce",
    "mobility": "Mobility",
    "cleantech": "CleanTech",
    "climate": "Climate",
    "biotech": "Biotech",
    "deeptech": "DeepTech",
    "gaming": "Gaming",
    "cybersecurity": "Cybersecurity",
    "devtools": "DevTools",
    "cloud": "Cloud",
    "proptech": "PropTech",
    "insurtech": "InsurTech",
    "agritech": "AgriTech",
}
_SECTOR_RE = re.compile(
    r"(?<![a-z0-9])("
    + "|".join(re.escape(k) for k in sorted(SECTOR_VOCABULARY, key=len, reverse=True))
    + r")(?![a-z0-9])"
)
_EMAIL_TRIM = "<>()[]{},;:\"'"
_LOCAL_PART_SPLIT = re.compile(r"[_.\-+]+")
_HAS_LETTER = re.compile(r"[a-zA-Z]")


def detect_email(text: str) -> Optional[str]:
    """First whitespace-separated token that contains an '@'."""
    for token in str(text).split():
        token = token.strip(_EMAIL_TRIM)
        if "@" in token and len(token) <= MAX_EMAIL_LENGTH:
            return token
    return None


def person_from_email(email: str) -> Optional[str]:
    """john.doe@acme.vc -> "John Doe"."""
    if not email or "@" not in email:
        return None
    local = str(email).split("@", 1)[0]
    parts = [p for p in _LOCAL_PART_SPLIT.split(local) if p]
    if not parts:
        return None
    return " ".join(p[:1].upper() + p[1:] for p in parts)


def detect_stage(text: str) -> Optional[str]:
    s = str(text).lower()
    if not s.strip():
        return None
    for canonical, pattern in STAGE_PATTERNS:
        if pattern.search(s):
            return STAGE_LABELS[canonical]
    return None


def detect_sectors(text: str, limit: int = 2) -> List[str]:
    """Known sector keywords in order of first appearance, at most `limit`."""
    found: List[str] = []
    for m in _SECTOR_RE.finditer(str(text).lower()):
        label = SECTOR_VOCABULARY[m.group(1)]
        if label not in found:
            found.append(label)
            if len(found) >= limit:
                break
    return found


def looks_like_name(value: str) -> bool:
    s = str(value).strip()
    return bool(s) and "@" not in s and len(s) <= MAX_NAME_LENGTH and bool(_HAS_LETTER.search(s))
