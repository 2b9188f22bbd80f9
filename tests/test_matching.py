"""
Unit tests for carousel matching: behavioral tests only.

Covers: first-match-wins selection, mode isolation, the alt-before-filename
tie-break, fail-fast pattern compilation, and URL filename derivation.
"""

import pytest

from errors import ConfigurationError
from matching import (
    CandidateImage,
    Found,
    MatchMode,
    MatchStrategyConfig,
    NotFound,
    compile_strategy,
    derive_filename,
    describe_candidates,
    match,
    substitute_day,
)

CAROUSEL_BASE = "https://gym.example.com/wp-content/uploads/2025/10"


def make_candidate(filename: str, alt: str = "") -> CandidateImage:
    return CandidateImage.from_element(alt, f"{CAROUSEL_BASE}/{filename}")


BOTH = MatchStrategyConfig(mode=MatchMode.BOTH)
ALT = MatchStrategyConfig(mode=MatchMode.ALT_TEXT)
FILENAME = MatchStrategyConfig(mode=MatchMode.FILENAME)


class TestDeriveFilename:
    def test_last_path_segment(self):
        assert derive_filename("https://x.test/uploads/2025/10/2-Monday-2.png") == "2-Monday-2.png"

    def test_query_and_fragment_ignored(self):
        assert derive_filename("https://x.test/a/3-Tuesday-2.png?ver=4#top") == "3-Tuesday-2.png"

    def test_trailing_slash_gives_empty(self):
        assert derive_filename("https://x.test/a/") == ""

    def test_empty_url(self):
        assert derive_filename("") == ""

    def test_from_element_handles_missing_attributes(self):
        candidate = CandidateImage.from_element(None, None)
        assert candidate == CandidateImage(alt_text="", source_url="", derived_filename="")


class TestMatchMode:
    @pytest.mark.parametrize("value,expected", [
        ("alt-text", MatchMode.ALT_TEXT),
        ("ALT_TEXT", MatchMode.ALT_TEXT),
        (" Filename ", MatchMode.FILENAME),
        ("both", MatchMode.BOTH),
        (MatchMode.BOTH, MatchMode.BOTH),
    ])
    def test_parse(self, value, expected):
        assert MatchMode.parse(value) is expected

    def test_parse_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown match strategy"):
            MatchMode.parse("fuzzy")


class TestFirstMatchWins:
    def test_returns_first_matching_candidate(self, week_carousel):
        result = match(week_carousel, "Wednesday", BOTH)
        assert isinstance(result, Found)
        assert result.candidate.derived_filename == "4-Wednesday-2.png"
        assert result.index == 3

    def test_earlier_match_beats_later_more_specific_match(self):
        candidates = [
            make_candidate("5-Monday-1.png"),
            make_candidate("2-Monday-2.png", alt="Monday workout, week 2"),
        ]
        result = match(candidates, "Monday", BOTH)
        assert result.image_url == candidates[0].source_url
        assert result.index == 0

    def test_newest_carousel_wins_over_stale_one(self):
        newest = make_candidate("2-Monday-2.png")
        stale = CandidateImage.from_element(
            "", "https://gym.example.com/wp-content/uploads/2025/09/2-Monday-1.png"
        )
        result = match([newest, stale], "Monday", FILENAME)
        assert result.image_url == newest.source_url

    def test_cover_not_matched_for_day(self):
        candidates = [
            make_candidate("2-Monday-2.png"),
            make_candidate("1-Cover-2.png"),
        ]
        config = MatchStrategyConfig(mode=MatchMode.FILENAME, filename_pattern="-{DAY}-")
        result = match(candidates, "Monday", config)
        assert isinstance(result, Found)
        assert result.index == 0
        assert result.image_url == candidates[0].source_url

    def test_cover_first_in_carousel_is_skipped(self, week_carousel):
        config = MatchStrategyConfig(mode=MatchMode.FILENAME, filename_pattern="-{DAY}-")
        result = match(week_carousel, "Monday", config)
        assert result.candidate.derived_filename == "2-Monday-2.png"

    @pytest.mark.parametrize("day", [
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
    ])
    def test_every_day_resolves_to_its_image(self, week_carousel, day):
        config = MatchStrategyConfig(mode=MatchMode.FILENAME, filename_pattern=r"\d+-{DAY}-\d+\.png")
        result = match(week_carousel, day, config)
        assert isinstance(result, Found)
        assert f"-{day}-" in result.candidate.derived_filename


class TestNotFound:
    @pytest.mark.parametrize("mode", list(MatchMode))
    def test_empty_candidates(self, mode):
        result = match([], "Friday", MatchStrategyConfig(mode=mode))
        assert result == NotFound(day="Friday", candidates_seen=0)
        assert not result.found

    def test_no_candidate_satisfies_either_check(self):
        candidates = [
            make_candidate("1-Cover-2.png", alt="Cover"),
            make_candidate("2-Monday-2.png", alt="Monday workout"),
        ]
        result = match(candidates, "Sunday", BOTH)
        assert isinstance(result, NotFound)
        assert result.candidates_seen == 2


class TestModeIsolation:
    def test_alt_mode_ignores_filename(self):
        with_day_in_file = make_candidate("2-Monday-2.png", alt="Workout")
        without_day_in_file = make_candidate("image-0001.png", alt="Workout")
        assert isinstance(match([with_day_in_file], "Monday", ALT), NotFound)
        assert isinstance(match([without_day_in_file], "Monday", ALT), NotFound)

    def test_alt_mode_outcome_unchanged_by_filename(self):
        a = make_candidate("2-Monday-2.png", alt="Monday workout")
        b = make_candidate("unrelated.png", alt="Monday workout")
        result_a = match([a], "Monday", ALT)
        result_b = match([b], "Monday", ALT)
        assert result_a.found and result_b.found
        assert result_a.matched_by == result_b.matched_by == "alt"

    def test_filename_mode_ignores_alt(self):
        candidate = make_candidate("image-0001.png", alt="Monday workout")
        assert isinstance(match([candidate], "Monday", FILENAME), NotFound)

    def test_alt_text_is_substring_match(self):
        candidate = make_candidate("x.png", alt="** Monday's WOD **")
        result = match([candidate], "Monday", ALT)
        assert result.found

    def test_alt_text_is_case_sensitive(self):
        candidate = make_candidate("x.png", alt="monday workout")
        assert isinstance(match([candidate], "Monday", ALT), NotFound)


class TestBothModeTieBreak:
    def test_alt_recorded_when_both_checks_match(self):
        candidate = make_candidate("2-Monday-2.png", alt="Monday workout")
        result = match([candidate], "Monday", BOTH)
        assert result.matched_by == "alt"

    def test_filename_recorded_when_only_filename_matches(self):
        candidate = make_candidate("2-Monday-2.png", alt="")
        result = match([candidate], "Monday", BOTH)
        assert result.matched_by == "filename"

    def test_either_check_selects(self):
        candidates = [
            make_candidate("cover.png", alt="Cover"),
            make_candidate("day.png", alt="Tuesday"),
        ]
        assert match(candidates, "Tuesday", BOTH).index == 1


class TestCompileStrategy:
    def test_substitutes_day_in_both_patterns(self):
        config = MatchStrategyConfig(alt_pattern="{DAY} workout", filename_pattern="-{DAY}-")
        matcher = compile_strategy(config, "Friday")
        assert matcher.resolved_alt == "Friday workout"
        assert matcher.filename_regex.pattern == "-Friday-"

    def test_every_placeholder_substituted(self):
        assert substitute_day("{DAY}/{DAY}", "Sunday") == "Sunday/Sunday"

    def test_invalid_regex_fails_at_construction(self):
        config = MatchStrategyConfig(mode=MatchMode.FILENAME, filename_pattern="({DAY}")
        with pytest.raises(ConfigurationError, match="Invalid filename pattern"):
            compile_strategy(config, "Monday")

    def test_invalid_regex_fails_even_with_empty_candidates(self):
        config = MatchStrategyConfig(filename_pattern="[{DAY}")
        with pytest.raises(ConfigurationError):
            match([], "Monday", config)

    def test_missing_placeholder_rejected(self):
        config = MatchStrategyConfig(mode=MatchMode.ALT_TEXT, alt_pattern="Monday")
        with pytest.raises(ConfigurationError, match="must contain"):
            compile_strategy(config, "Tuesday")

    def test_unused_pattern_may_omit_placeholder(self):
        config = MatchStrategyConfig(mode=MatchMode.FILENAME, alt_pattern="anything")
        assert compile_strategy(config, "Monday").mode is MatchMode.FILENAME

    def test_unknown_mode_is_configuration_error(self):
        config = MatchStrategyConfig(mode="sideways")
        with pytest.raises(ConfigurationError, match="Unknown match strategy"):
            compile_strategy(config, "Monday")

    def test_string_mode_accepted(self):
        config = MatchStrategyConfig(mode="filename")
        assert compile_strategy(config, "Monday").mode is MatchMode.FILENAME

    def test_unanchored_pattern_can_match_inside_longer_token(self):
        # No boundary safety beyond what the pattern encodes
        candidate = make_candidate("2-Mondays-2.png")
        result = match([candidate], "Monday", FILENAME)
        assert result.found


def test_describe_candidates():
    lines = describe_candidates([make_candidate("2-Monday-2.png", alt="Monday")])
    assert lines == ['Alt: "Monday" | File: 2-Monday-2.png']
