"""
Tests for building a client profile.
"""

from dealmatch.models import ClientProfile
from dealmatch.profile import build_profile


class TestBuildProfile:
    def test_primary_aliases(self, client_record):
        profile = build_profile(client_record)
        assert profile == ClientProfile(
            sector="FinTech", stage="Seed", location="Boston", funding_amount="$1M"
        )

    def test_secondary_aliases(self):
        profile = build_profile({
            "sector": "SaaS",
            "stage": "Series A",
            "city": "Austin",
            "fundingAmount": "2M",
        })
        assert profile.sector == "SaaS"
        assert profile.stage == "Series A"
        assert profile.location == "Austin"
        assert profile.funding_amount == "2M"

    def test_first_alias_wins(self):
        profile = build_profile({"industry": "Healthcare", "sector": "Biotech"})
        assert profile.sector == "Healthcare"

    def test_numeric_ask_becomes_text(self):
        assert build_profile({"investment_ask": 1500000}).funding_amount == "1500000"

    def test_missing_fields_are_empty_strings(self):
        profile = build_profile({"company_name": "PayFlow"})
        assert profile == ClientProfile()
        assert profile.is_empty()

    def test_no_heuristics_for_client_records(self):
        """Client records only use their two aliases per field."""
        profile = build_profile({"notes": "We are raising a seed round in fintech"})
        assert profile.stage == ""
        assert profile.sector == ""

    def test_non_mapping(self):
        assert build_profile(None) == ClientProfile()

    def test_none_values_normalized(self):
        profile = ClientProfile(sector=None, stage=" Seed ")
        assert profile.sector == ""
        assert profile.stage == "Seed"
