"""
Carousel matching module.

Resolves the day to scrape and picks that day's image out of a scanned
carousel.

Key components:
- types: CandidateImage, MatchMode, MatchStrategyConfig, Found/NotFound
- days: resolve_day() for explicit overrides or "tomorrow"
- matcher: compile_strategy() and match(), first-match-wins selection
"""

from .types import (
    CandidateImage,
    MatchMode,
    MatchStrategyConfig,
    MatchResult,
    Found,
    NotFound,
    derive_filename,
)
from .days import resolve_day, canonical_day, today_in
from .matcher import (
    CompiledMatcher,
    compile_strategy,
    match,
    substitute_day,
    describe_candidates,
)

__all__ = [
    "CandidateImage",
    "MatchMode",
    "MatchStrategyConfig",
    "MatchResult",
    "Found",
    "NotFound",
    "derive_filename",
    "resolve_day",
    "canonical_day",
    "today_in",
    "CompiledMatcher",
    "compile_strategy",
    "match",
    "substitute_day",
    "describe_candidates",
]
