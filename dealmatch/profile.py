"""Build a ClientProfile from the client's own record."""

from types import MappingProxyType
from typing import Any, Mapping

from .models import ClientProfile
from .resolver import key_index, lookup_text

# Client records are first-party, so two aliases per field and no heuristics.
PROFILE_ALIASES = MappingProxyType({
    "sector": ("industry", "sector"),
    "stage": ("fund_stage", "stage"),
    "location": ("location", "city"),
    "funding_amount": ("investment_ask", "fundingAmount"),
})


def build_profile(client_record: Mapping[str, Any]) -> ClientProfile:
    if not isinstance(client_record, Mapping):
        return ClientProfile()
    index = key_index(client_record)
    return ClientProfile(**{field: lookup_text(index, keys) for field, keys in PROFILE_ALIASES.items()})
