"""
End-to-end tests for a matching invocation.
"""

import os
import threading

import pytest
from dealmatch import pipeline
from dealmatch.config import Settings
from dealmatch.errors import BatchCancelled, InvalidFilterConfiguration, UnknownRecordKind
from dealmatch.models import ClientProfile
from dealmatch.pipeline import match_candidates, score_batch
from dealmatch.scoring import DEFAULT_WEIGHTS, Weights


@pytest.fixture(autouse=True)
def clean_settings(tmp_path, monkeypatch):
    """Run without a .env file or DEALMATCH_* variables from the host."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("DEALMATCH_"):
            monkeypatch.delenv(name)


@pytest.fixture
def investor_batch(investor_record, messy_record):
    return [
        investor_record,
        messy_record,
        {"Name": "Acme Ventures", "Contact": "j.doe@acme.vc"},
        {
            "firm_name": "Harbor Fund",
            "sectors": ["FinTech", "Payments"],
            "stage": "Seed",
            "city": "Boston",
            "state": "MA",
            "check_size": "$750k-$1.5M",
        },
        {},
    ]


class TestMatchCandidates:
    def test_ranked_output(self, client_record, investor_batch):
        entries = match_candidates(client_record, investor_batch, "investor", max_workers=1)
        assert len(entries) == len(investor_batch)
        best = entries[0]
        assert best.candidate.display_name == "Harbor Fund"
        assert best.display_score == 100
        scores = [e.display_score for e in entries]
        assert scores == sorted(scores, reverse=True)

    def test_all_empty_record_is_kept(self, client_record, investor_batch):
        entries = match_candidates(client_record, investor_batch, "investor", max_workers=1)
        rows = [e.as_display() for e in entries if not e.candidate.display_name]
        assert len(rows) == 1
        assert rows[0]["score"] == 0
        assert rows[0]["name"] == "—"

    def test_accepts_prebuilt_profile(self, fintech_profile, investor_batch):
        from_record = match_candidates(
            {"industry": "FinTech", "fund_stage": "Seed", "location": "Boston", "investment_ask": "$1M"},
            investor_batch,
        )
        from_profile = match_candidates(fintech_profile, investor_batch)
        assert from_record == from_profile

    def test_worker_count_does_not_change_output(self, client_record, investor_batch):
        serial = match_candidates(client_record, investor_batch, max_workers=1)
        parallel = match_candidates(client_record, investor_batch * 4, max_workers=4)
        assert [e.candidate for e in parallel[::4]] == [e.candidate for e in serial]
        assert match_candidates(client_record, investor_batch * 4, max_workers=4) == parallel

    def test_filters_reorder_without_rescoring(self, client_record, investor_batch):
        plain = match_candidates(client_record, investor_batch)
        filtered = match_candidates(client_record, investor_batch, filters={"amount": True})
        assert {e.candidate.display_name: e.score for e in plain} == {
            e.candidate.display_name: e.score for e in filtered
        }
        assert all(e.satisfied_filter_count == 0 for e in plain)
        assert filtered[0].satisfied_filter_count == 1

    def test_incubators(self, fintech_profile, incubator_record):
        entries = match_candidates(fintech_profile, [incubator_record], "incubator")
        assert entries[0].candidate.kind == "incubator"
        # pre-seed is adjacent to seed, Boston overlaps
        assert entries[0].breakdown.stage > 0
        assert entries[0].breakdown.location > 0
        assert entries[0].breakdown.sector == 0

    def test_empty_candidate_list(self, client_record):
        assert match_candidates(client_record, []) == []

    def test_empty_profile(self, investor_batch):
        assert match_candidates({"company_name": "Nameless"}, investor_batch) == []
        assert match_candidates(ClientProfile(), investor_batch) == []

    def test_bad_kind_rejected_before_work(self, client_record):
        with pytest.raises(UnknownRecordKind):
            match_candidates(client_record, [], "investors")

    def test_bad_filters_rejected(self, client_record, investor_batch):
        with pytest.raises(InvalidFilterConfiguration):
            match_candidates(client_record, investor_batch, filters={"ticket": True})

    def test_metrics_recorded(self, client_record, investor_batch):
        before = pipeline.logger.get_metrics()
        match_candidates(client_record, investor_batch, max_workers=1)
        after = pipeline.logger.get_metrics()
        assert after["batches_run"] == before["batches_run"] + 1
        assert after["candidates_scored"] == before["candidates_scored"] + len(investor_batch)


class TestScoreBatch:
    def test_keeps_input_order(self, fintech_profile, investor_batch):
        scored = score_batch(fintech_profile, investor_batch, max_workers=3)
        assert [s.candidate.display_name for s in scored][:2] == ["TechVentures Capital", "Northwind Partners"]

    def test_cancelled_before_start(self, fintech_profile, investor_batch):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(BatchCancelled) as exc:
            score_batch(fintech_profile, investor_batch, max_workers=1, cancel_event=cancel)
        assert exc.value.completed == 0
        assert exc.value.total == len(investor_batch)

    def test_cancelled_mid_batch(self, fintech_profile, investor_batch, monkeypatch):
        cancel = threading.Event()
        calls = []
        original = pipeline.score_record

        def score_then_cancel(*args, **kwargs):
            calls.append(1)
            if len(calls) == 2:
                cancel.set()
            return original(*args, **kwargs)

        monkeypatch.setattr(pipeline, "score_record", score_then_cancel)
        with pytest.raises(BatchCancelled) as exc:
            score_batch(fintech_profile, investor_batch, max_workers=1, cancel_event=cancel)
        assert exc.value.completed == 2

    def test_unset_event_completes(self, fintech_profile, investor_batch):
        scored = score_batch(fintech_profile, investor_batch, max_workers=2, cancel_event=threading.Event())
        assert len(scored) == len(investor_batch)


class TestConfiguredDefaults:
    """Weights and pool size fall back to the configured settings."""

    @staticmethod
    def _score_of(entries, name):
        return next(e.score for e in entries if e.candidate.display_name == name)

    def test_stock_weights_without_configuration(self, client_record, investor_record):
        entries = match_candidates(client_record, [investor_record])
        assert self._score_of(entries, "TechVentures Capital") == pytest.approx(80.0)

    def test_environment_weights_change_the_score(self, client_record, investor_record, monkeypatch):
        for name in ("SECTOR", "STAGE", "LOCATION", "AMOUNT"):
            monkeypatch.setenv(f"DEALMATCH_WEIGHT_{name}", "25")
        entries = match_candidates(client_record, [investor_record])
        assert self._score_of(entries, "TechVentures Capital") == pytest.approx(75.0)

    def test_dotenv_weights_change_the_score(self, client_record, investor_record, tmp_path):
        (tmp_path / ".env").write_text(
            "DEALMATCH_WEIGHT_SECTOR=25\nDEALMATCH_WEIGHT_STAGE=25\n"
            "DEALMATCH_WEIGHT_LOCATION=25\nDEALMATCH_WEIGHT_AMOUNT=25\n"
        )
        try:
            entries = match_candidates(client_record, [investor_record])
        finally:
            for name in ("SECTOR", "STAGE", "LOCATION", "AMOUNT"):
                os.environ.pop(f"DEALMATCH_WEIGHT_{name}", None)
        assert self._score_of(entries, "TechVentures Capital") == pytest.approx(75.0)

    def test_explicit_settings(self, client_record, investor_record):
        settings = Settings(weights=Weights(sector=25, stage=25, location=25, amount=25), max_workers=2)
        entries = match_candidates(client_record, [investor_record], settings=settings)
        assert self._score_of(entries, "TechVentures Capital") == pytest.approx(75.0)

    def test_explicit_weights_win_over_environment(self, client_record, investor_record, monkeypatch):
        for name in ("SECTOR", "STAGE", "LOCATION", "AMOUNT"):
            monkeypatch.setenv(f"DEALMATCH_WEIGHT_{name}", "25")
        entries = match_candidates(client_record, [investor_record], weights=DEFAULT_WEIGHTS, max_workers=1)
        assert self._score_of(entries, "TechVentures Capital") == pytest.approx(80.0)
