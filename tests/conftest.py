"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Dict, Any

from dealmatch.models import ClientProfile


@pytest.fixture
def investor_record() -> Dict[str, Any]:
    """Well-formed investor record with the usual column names."""
    return {
        "investor_name": "TechVentures Capital",
        "partner_name": "John Smith",
        "partner_email": "john@techventures.com",
        "fund_stage": "Seed, Series A",
        "sector_focus": "SaaS, Fintech",
        "location": "San Francisco, CA",
        "ticket_size": "$500k - $2M",
    }


@pytest.fixture
def incubator_record() -> Dict[str, Any]:
    """Incubator record with split location fields and a nested ticket."""
    return {
        "incubatorName": "LaunchPad Labs",
        "contact_email": "hello@launchpad.io",
        "sectorFocus": ["AI", "Healthcare", "EdTech"],
        "stage": "Pre-Seed",
        "city": "Boston",
        "state": "MA",
        "country": "USA",
        "ticket_size": {"min": "50k", "max": "150k"},
    }


@pytest.fixture
def messy_record() -> Dict[str, Any]:
    """Record with no recognizable column names at all."""
    return {
        "Col1": "Northwind Partners",
        "Col2": "Reach the team at deals@northwind.vc",
        "Col3": "We lead pre-seed rounds in healthcare and fintech companies.",
    }


@pytest.fixture
def client_record() -> Dict[str, Any]:
    """Client record as stored by the intake form."""
    return {
        "company_name": "PayFlow",
        "industry": "FinTech",
        "fund_stage": "Seed",
        "location": "Boston",
        "investment_ask": "$1M",
    }


@pytest.fixture
def fintech_profile() -> ClientProfile:
    return ClientProfile(sector="FinTech", stage="Seed", location="Boston", funding_amount="$1M")
