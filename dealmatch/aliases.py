"""
Alias tables: where each canonical attribute may live in a raw record.

Tables are plain data. Each list is in priority order; the resolver returns
the first alias holding a non-blank value. Lookups are case-insensitive.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from .errors import UnknownRecordKind
from .schema import validate_record_kind

NAME = "name"
PARTNER = "partner"
EMAIL = "email"
FOCUS = "focus"
STAGE = "stage"
LOCATION = "location"
CITY = "city"
STATE = "state"
COUNTRY = "country"
FIRST_NAME = "first_name"
LAST_NAME = "last_name"
CONTACT_PERSON = "contact_person"
DESCRIPTION = "description"
TICKET = "ticket"
TICKET_MIN = "ticket_min"
TICKET_MAX = "ticket_max"

AliasTable = Mapping[str, Tuple[str, ...]]

_PARTNER = (
    "partner_name", "partnername", "partner name", "contact_name", "contact name",
    "contact_person", "person", "partner", "contact", "owner", "manager", "ceo", "founder",
)
_EMAIL = (
    "partner_email", "email", "contact_email", "work_email", "gmail", "mail",
    "partneremail", "primary_email", "workemail", "email_id", "email address",
)
_FOCUS = (
    "sector_focus", "sector focus", "sectorfocus", "focus_sectors", "focus", "focus_area", "focus area",
    "primary_focus", "primary focus", "fund_focus", "sectors", "industry", "sector",
    "vertical", "verticals", "fund_type", "category", "areas", "area_focus", "thesis",
)
_STAGE = (
    "fund_stage", "stage", "investment_stage", "current_stage", "round",
    "round_preference", "stage_preference", "preferred_stage", "stages", "acceptedstages",
)
_LOCATION = ("location", "geography", "region", "hq_location", "headquarters", "locations")
_SHARED = {
    CITY: ("city", "city_name"),
    STATE: ("state_city", "state_province", "state", "statename", "province"),
    COUNTRY: ("country", "countryname", "country_name"),
    FIRST_NAME: ("first_name", "firstname", "given_name", "first"),
    LAST_NAME: ("last_name", "lastname", "surname", "last"),
    CONTACT_PERSON: ("contact_name", "person", "owner", "manager", "ceo", "founder"),
    DESCRIPTION: (
        "description", "about", "notes", "summary", "bio", "thesis", "areas",
        "area_focus", "categories", "category", "tags",
    ),
    TICKET: (
        "ticket_size", "ticket size", "ticketsize", "ticket", "check_size", "check size",
        "cheque_size", "investment_range", "investment range", "investment_size",
        "typical_check", "funding_offered", "funding",
    ),
    TICKET_MIN: ("ticket_size_min", "ticketsizemin", "min_ticket", "min_ticket_size", "min_check", "minimum_investment"),
    TICKET_MAX: ("ticket_size_max", "ticketsizemax", "max_ticket", "max_ticket_size", "max_check", "maximum_investment"),
}

INVESTOR_ALIASES: AliasTable = MappingProxyType({
    NAME: (
        "investor_name", "firm_name", "fund_name", "firm", "organization", "company",
        "name", "investor", "fund",
    ),
    PARTNER: _PARTNER,
    EMAIL: _EMAIL,
    FOCUS: _FOCUS,
    STAGE: _STAGE,
    LOCATION: _LOCATION,
    **_SHARED,
})

INCUBATOR_ALIASES: AliasTable = MappingProxyType({
    NAME: (
        "incubator_name", "incubatorname", "program_name", "programname", "accelerator_name",
        "organization", "company", "name", "incubator", "accelerator", "program",
    ),
    PARTNER: _PARTNER + ("program_manager", "director"),
    EMAIL: _EMAIL,
    FOCUS: _FOCUS,
    STAGE: _STAGE + ("program_stage", "startup_stage"),
    LOCATION: _LOCATION,
    **_SHARED,
})

ALIAS_TABLES = MappingProxyType({
    "investor": INVESTOR_ALIASES,
    "incubator": INCUBATOR_ALIASES,
})


def alias_table_for(kind: str) -> AliasTable:
    errors = validate_record_kind(kind)
    if errors:
        raise UnknownRecordKind(kind, errors)
    return ALIAS_TABLES[kind]
