"""
Tests for the workout workflow with fake collaborators.

Covers: the happy path, fail-fast configuration errors, the not-found path,
and the preprocessing fallback flowing into the report.
"""

from datetime import date

import pytest

from errors import ConfigurationError, NotFoundError, RecognitionFailure
from ocr import RecognizedText
from settings import Settings
from workflow import WorkoutReport, find_workout_image, run_workout

MONDAY = date(2025, 10, 13)


class FakeSource:
    def __init__(self, candidates):
        self.candidates = candidates
        self.selectors = []

    def scan(self, selector):
        self.selectors.append(selector)
        return list(self.candidates)


class FakeEngine:
    name = "fake"

    def __init__(self, raw_text="Strength\r\n\r\n\r\n5x5 Back Squat\n", confidence=91.0, error=None):
        self.raw_text = raw_text
        self.confidence = confidence
        self.error = error
        self.received = []

    def recognize(self, image_data):
        self.received.append(image_data)
        if self.error is not None:
            raise self.error
        return RecognizedText(raw_text=self.raw_text, confidence=self.confidence)


class RecordingNotifier:
    def __init__(self):
        self.reports = []

    def send_workout(self, report):
        self.reports.append(report)


class RecordingFetch:
    def __init__(self, data):
        self.data = data
        self.urls = []

    def __call__(self, url):
        self.urls.append(url)
        return self.data


def make_settings(**values) -> Settings:
    values.setdefault("gym_workout_url", "https://gym.example.com/workouts")
    return Settings(_env_file=None, **values)


class TestRunWorkout:
    def test_happy_path(self, week_carousel, schedule_png):
        source = FakeSource(week_carousel)
        fetch = RecordingFetch(schedule_png)
        engine = FakeEngine()
        notifier = RecordingNotifier()

        report = run_workout(
            make_settings(),
            page_source=source,
            fetch=fetch,
            ocr_engine=engine,
            notifier=notifier,
            today=MONDAY,
        )

        assert isinstance(report, WorkoutReport)
        assert report.day == "Tuesday"
        assert report.date == MONDAY
        assert report.image_url.endswith("/3-Tuesday-2.png")
        assert report.matched_by == "alt"
        assert report.text == "Strength\n\n5x5 Back Squat"
        assert report.confidence == 91.0
        assert not report.used_fallback
        assert report.image_bytes == schedule_png
        assert report.duration_seconds >= 0

        assert source.selectors == [".workout-carousel"]
        assert fetch.urls == [report.image_url]
        assert notifier.reports == [report]

    def test_ocr_runs_on_preprocessed_image(self, week_carousel, schedule_png):
        engine = FakeEngine()
        run_workout(
            make_settings(),
            page_source=FakeSource(week_carousel),
            fetch=RecordingFetch(schedule_png),
            ocr_engine=engine,
            today=MONDAY,
        )
        (received,) = engine.received
        assert received.startswith(b"\x89PNG")
        assert received != schedule_png

    def test_explicit_day(self, week_carousel, schedule_png):
        report = run_workout(
            make_settings(),
            target_day="sunday",
            page_source=FakeSource(week_carousel),
            fetch=RecordingFetch(schedule_png),
            ocr_engine=FakeEngine(),
            today=MONDAY,
        )
        assert report.day == "Sunday"
        assert report.image_url.endswith("/8-Sunday-2.png")

    def test_undecodable_image_falls_back_to_original(self, week_carousel):
        engine = FakeEngine()
        report = run_workout(
            make_settings(),
            page_source=FakeSource(week_carousel),
            fetch=RecordingFetch(b"not an image"),
            ocr_engine=engine,
            today=MONDAY,
        )
        assert report.used_fallback
        assert engine.received == [b"not an image"]

    def test_delivery_skipped_without_notifier(self, week_carousel, schedule_png):
        report = run_workout(
            make_settings(),
            page_source=FakeSource(week_carousel),
            fetch=RecordingFetch(schedule_png),
            ocr_engine=FakeEngine(),
            today=MONDAY,
        )
        assert report.text

    def test_recognition_failure_propagates(self, week_carousel, schedule_png):
        notifier = RecordingNotifier()
        with pytest.raises(RecognitionFailure):
            run_workout(
                make_settings(),
                page_source=FakeSource(week_carousel),
                fetch=RecordingFetch(schedule_png),
                ocr_engine=FakeEngine(error=RecognitionFailure("EasyOCR failed")),
                notifier=notifier,
                today=MONDAY,
            )
        assert notifier.reports == []


class TestFailFast:
    def test_invalid_pattern_fails_before_scanning(self, week_carousel):
        source = FakeSource(week_carousel)
        with pytest.raises(ConfigurationError, match="Invalid filename pattern"):
            run_workout(
                make_settings(image_filename_pattern="({DAY}"),
                page_source=source,
                ocr_engine=FakeEngine(),
                today=MONDAY,
            )
        assert source.selectors == []

    def test_unknown_ocr_engine_fails_before_scanning(self, week_carousel):
        source = FakeSource(week_carousel)
        with pytest.raises(ConfigurationError, match="Unsupported OCR engine"):
            run_workout(make_settings(ocr_engine="tesseract"), page_source=source, today=MONDAY)
        assert source.selectors == []

    def test_invalid_day_fails_before_scanning(self, week_carousel):
        source = FakeSource(week_carousel)
        with pytest.raises(ConfigurationError):
            run_workout(make_settings(), target_day="Caturday", page_source=source,
                        ocr_engine=FakeEngine(), today=MONDAY)
        assert source.selectors == []


class TestFindWorkoutImage:
    def test_not_found_carries_candidates(self, week_carousel):
        cover_only = week_carousel[:1]
        fetch = RecordingFetch(b"")
        with pytest.raises(NotFoundError) as excinfo:
            run_workout(
                make_settings(),
                page_source=FakeSource(cover_only),
                fetch=fetch,
                ocr_engine=FakeEngine(),
                today=MONDAY,
            )
        assert excinfo.value.day == "Tuesday"
        assert excinfo.value.candidates == tuple(cover_only)
        assert str(excinfo.value) == "No image found for Tuesday in carousel"
        assert fetch.urls == []

    def test_returns_match_and_candidates(self, week_carousel):
        found, candidates = find_workout_image(
            make_settings(image_match_strategy="filename"),
            "Friday",
            page_source=FakeSource(week_carousel),
        )
        assert found.matched_by == "filename"
        assert found.candidate.derived_filename == "6-Friday-2.png"
        assert candidates == week_carousel

    def test_custom_selector(self, week_carousel):
        source = FakeSource(week_carousel)
        find_workout_image(make_settings(carousel_selector="#wods"), "Monday", page_source=source)
        assert source.selectors == ["#wods"]
