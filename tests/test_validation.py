"""Tests for the check-in request gates."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from protocol_engine.exceptions import InvalidSessionRequest, ProtocolError
from protocol_engine.models.enums import DurationBucket
from protocol_engine.validation import duration_bucket_for, validate_duration, validate_start_time


class TestValidateStartTime:
    def test_past_start_rejected(self, reference_time: datetime) -> None:
        with pytest.raises(InvalidSessionRequest, match="in the past"):
            validate_start_time(reference_time - timedelta(minutes=1), reference_time)

    def test_now_and_future_accepted(self, reference_time: datetime) -> None:
        validate_start_time(reference_time, reference_time)
        validate_start_time(reference_time + timedelta(days=2), reference_time)

    def test_missing_start_accepted(self, reference_time: datetime) -> None:
        validate_start_time(None, reference_time)


class TestValidateDuration:
    def test_bucket_is_enough(self) -> None:
        validate_duration(DurationBucket.SHORT)

    def test_custom_minutes_is_enough(self) -> None:
        validate_duration(None, 75)

    @pytest.mark.parametrize("custom", [None, 0, -10])
    def test_neither_rejected(self, custom: int | None) -> None:
        with pytest.raises(InvalidSessionRequest):
            validate_duration(None, custom)

    def test_is_protocol_error(self) -> None:
        assert issubclass(InvalidSessionRequest, ProtocolError)


class TestDurationBucketFor:
    @pytest.mark.parametrize(
        ("minutes", "bucket"),
        [
            (30, DurationBucket.SHORT),
            (59, DurationBucket.SHORT),
            (60, DurationBucket.MEDIUM),
            (119, DurationBucket.MEDIUM),
            (120, DurationBucket.LONG),
            (239, DurationBucket.LONG),
            (240, DurationBucket.ULTRA),
            (600, DurationBucket.ULTRA),
        ],
    )
    def test_boundaries(self, minutes: int, bucket: DurationBucket) -> None:
        assert duration_bucket_for(minutes) == bucket
