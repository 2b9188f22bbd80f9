"""
Carousel image matching.

Selects the image for a given day from a scanned carousel. Selection is
first-match-wins in document order: the carousel lists the newest week
first, so the first image satisfying the predicate is the current one.

Patterns are resolved and compiled once per run in compile_strategy(), so a
broken filename regex fails before any page is loaded.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from config import DAY_PLACEHOLDER
from errors import ConfigurationError

from .types import (
    CandidateImage,
    Found,
    MatchedBy,
    MatchMode,
    MatchResult,
    MatchStrategyConfig,
    NotFound,
)

logger = logging.getLogger(__name__)


def substitute_day(template: str, day: str) -> str:
    """Replace every day placeholder in a pattern template.

    The day is inserted verbatim; no regex escaping is applied.
    """
    return template.replace(DAY_PLACEHOLDER, day)


@dataclass(frozen=True)
class CompiledMatcher:
    """A match strategy with the day already substituted.

    Attributes:
        mode: Which sub-checks are active.
        day: The day label the patterns were resolved for.
        resolved_alt: Literal substring searched for in alt text.
        filename_regex: Compiled pattern searched for in the derived filename.
    """

    mode: MatchMode
    day: str
    resolved_alt: str
    filename_regex: re.Pattern[str]

    def check(self, candidate: CandidateImage) -> MatchedBy | None:
        """Return which sub-check selects `candidate`, or None.

        Under BOTH the alt check runs first and wins when both would match.
        """
        if self.mode.checks_alt and self.resolved_alt in candidate.alt_text:
            return "alt"
        if self.mode.checks_filename and self.filename_regex.search(candidate.derived_filename):
            return "filename"
        return None

    def match(self, candidates: Sequence[CandidateImage]) -> MatchResult:
        """Return the first candidate satisfying the predicate, in order."""
        for index, candidate in enumerate(candidates):
            matched_by = self.check(candidate)
            if matched_by is not None:
                logger.debug(
                    "Candidate %s matched %s by %s: %s",
                    index, self.day, matched_by, candidate.derived_filename,
                )
                return Found(
                    image_url=candidate.source_url,
                    matched_by=matched_by,
                    candidate=candidate,
                    index=index,
                )
        return NotFound(day=self.day, candidates_seen=len(candidates))


def compile_strategy(config: MatchStrategyConfig, day: str) -> CompiledMatcher:
    """Resolve and compile a match strategy for one day.

    Args:
        config: Strategy from configuration.
        day: Resolved day label, e.g. "Monday".

    Returns:
        CompiledMatcher ready to run over candidates.

    Raises:
        ConfigurationError: If the mode is unknown, a pattern in use lacks the
            day placeholder, or the filename pattern is not a valid regex.
    """
    try:
        mode = MatchMode.parse(config.mode)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    if mode.checks_alt and DAY_PLACEHOLDER not in config.alt_pattern:
        raise ConfigurationError(
            f"Alt pattern {config.alt_pattern!r} must contain {DAY_PLACEHOLDER}"
        )
    if mode.checks_filename and DAY_PLACEHOLDER not in config.filename_pattern:
        raise ConfigurationError(
            f"Filename pattern {config.filename_pattern!r} must contain {DAY_PLACEHOLDER}"
        )

    resolved_filename = substitute_day(config.filename_pattern, day)
    try:
        filename_regex = re.compile(resolved_filename)
    except re.error as exc:
        raise ConfigurationError(
            f"Invalid filename pattern {resolved_filename!r}: {exc}"
        ) from exc

    return CompiledMatcher(
        mode=mode,
        day=day,
        resolved_alt=substitute_day(config.alt_pattern, day),
        filename_regex=filename_regex,
    )


def match(
    candidates: Sequence[CandidateImage],
    day: str,
    config: MatchStrategyConfig,
) -> MatchResult:
    """Select the image for `day` from `candidates`.

    Convenience wrapper: compile_strategy(config, day).match(candidates).
    """
    return compile_strategy(config, day).match(candidates)


def describe_candidates(candidates: Sequence[CandidateImage]) -> list[str]:
    """Format candidates for debug output, one line per image."""
    return [
        f'Alt: "{candidate.alt_text}" | File: {candidate.derived_filename}'
        for candidate in candidates
    ]
