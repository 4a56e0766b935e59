"""Tests for row schemas (Pydantic)."""

import numpy as np
import pytest
from pydantic import ValidationError

from gatedrop.data.schemas import CandidateSchema, RaceResultSchema
from gatedrop.exceptions import InvalidStateError
from gatedrop.models.roster import BikeClass


class TestCandidateSchema:
    """Candidate rows become RosterCandidates."""

    def test_valid_row(self):
        row = CandidateSchema.model_validate(
            {"rider_id": 7, "bike_class": "450", "expected_points": 31.5, "is_all_star": True}
        )
        candidate = row.to_candidate()

        assert candidate.id == 7
        assert candidate.bike_class is BikeClass.CLASS_450
        assert candidate.expected_points == 31.5
        assert candidate.is_all_star
        assert not candidate.is_excluded

    def test_id_alias(self):
        row = CandidateSchema.model_validate({"id": "r12", "bike_class": "Class250", "expected_points": 4})
        assert row.rider_id == "r12"
        assert row.bike_class is BikeClass.CLASS_250

    def test_numpy_values_unboxed(self):
        row = CandidateSchema.model_validate({
            "rider_id": np.int64(3),
            "bike_class": np.int64(250),
            "expected_points": np.float64(12.25),
            "is_all_star": np.bool_(False),
        })
        assert type(row.rider_id) is int
        assert row.to_candidate().expected_points == 12.25

    def test_nan_rider_name_becomes_none(self):
        row = CandidateSchema.model_validate(
            {"rider_id": 1, "rider_name": float("nan"), "bike_class": "450", "expected_points": 1.0}
        )
        assert row.rider_name is None

    @pytest.mark.parametrize("points", [float("nan"), float("inf"), "lots"])
    def test_bad_expected_points(self, points):
        with pytest.raises(ValidationError):
            CandidateSchema.model_validate({"rider_id": 1, "bike_class": "450", "expected_points": points})

    def test_unknown_bike_class(self):
        with pytest.raises(ValidationError):
            CandidateSchema.model_validate({"rider_id": 1, "bike_class": "125", "expected_points": 1.0})

    def test_missing_id(self):
        with pytest.raises(ValidationError):
            CandidateSchema.model_validate({"bike_class": "450", "expected_points": 1.0})


class TestRaceResultSchema:
    """Race-result rows and pending finishes."""

    def test_defaults(self):
        row = RaceResultSchema.model_validate({"rider_id": 1, "finish_position": 3})
        assert row.handicap == 0
        assert not row.is_all_star
        assert row.bike_class is None
        assert row.to_scored().total_points == 40

    @pytest.mark.parametrize("value", [None, float("nan"), "", "  "])
    def test_pending_finish(self, value):
        row = RaceResultSchema.model_validate({"rider_id": 1, "finish_position": value})
        assert row.is_pending
        with pytest.raises(InvalidStateError):
            row.to_scored()

    @pytest.mark.parametrize("value, expected", [(4.0, 4), ("4", 4), (np.float64(4.0), 4), (np.int64(4), 4)])
    def test_finish_normalized_to_int(self, value, expected):
        row = RaceResultSchema.model_validate({"rider_id": 1, "finish_position": value})
        assert row.finish_position == expected
        assert type(row.finish_position) is int

    def test_dnf_normalized(self):
        row = RaceResultSchema.model_validate({"rider_id": 1, "finish_position": "dnf", "handicap": 5})
        assert row.finish_position == "DNF"
        assert row.to_scored().total_points == 4

    def test_fractional_finish_rejected(self):
        with pytest.raises(ValidationError):
            RaceResultSchema.model_validate({"rider_id": 1, "finish_position": 3.5})
