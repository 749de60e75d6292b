"""Record normalization and multi-criteria matching of clients to investors and incubators."""

__version__ = "0.1.0"

from .config import Settings, configure_logging, load_settings
from .errors import (
    BatchCancelled,
    InvalidFilterConfiguration,
    InvalidWeightConfiguration,
    MatchingError,
    UnknownRecordKind,
)
from .models import (
    Breakdown,
    ClientProfile,
    MatchFilters,
    MatchResult,
    RankedEntry,
    ResolvedCandidate,
    ScoredCandidate,
)
from .pipeline import match_candidates, score_batch, score_record
from .profile import build_profile
from .ranking import rank
from .resolver import resolve, resolve_all
from .scoring import DEFAULT_WEIGHTS, Weights, score_candidate

__all__ = [
    "__version__",
    "BatchCancelled",
    "Breakdown",
    "ClientProfile",
    "DEFAULT_WEIGHTS",
    "InvalidFilterConfiguration",
    "InvalidWeightConfiguration",
    "MatchFilters",
    "MatchResult",
    "MatchingError",
    "RankedEntry",
    "ResolvedCandidate",
    "ScoredCandidate",
    "Settings",
    "UnknownRecordKind",
    "Weights",
    "build_profile",
    "configure_logging",
    "load_settings",
    "match_candidates",
    "rank",
    "resolve",
    "resolve_all",
    "score_batch",
    "score_candidate",
    "score_record",
]
