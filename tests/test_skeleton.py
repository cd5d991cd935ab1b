"""
Tests for the plan skeleton builder.
"""

import pytest

from mealwise.errors import InvalidInputError
from mealwise.planning.models import DaySelection
from mealwise.planning.skeleton import build_skeleton, count_slots


class TestBuildSkeleton:

    def test_only_requested_slots(self):
        skeleton = build_skeleton({"Monday": {"lunch": True, "dinner": False}})
        assert skeleton == {"Monday": {"lunch": ""}}

    def test_days_with_nothing_requested_are_omitted(self):
        skeleton = build_skeleton({
            "Monday": {"lunch": True, "dinner": True},
            "Tuesday": {"lunch": False, "dinner": False},
            "Wednesday": {},
        })
        assert list(skeleton) == ["Monday"]

    def test_canonical_day_order(self):
        skeleton = build_skeleton({
            "sunday": {"dinner": True},
            "WEDNESDAY": {"lunch": True},
            "monday": {"dinner": True},
        })
        assert list(skeleton) == ["Monday", "Wednesday", "Sunday"]

    def test_accepts_day_selection_models(self):
        skeleton = build_skeleton({"Friday": DaySelection(lunch=False, dinner=True)})
        assert skeleton == {"Friday": {"dinner": ""}}

    def test_nothing_requested_is_empty(self):
        assert build_skeleton({"Monday": {"lunch": False}}) == {}
        assert build_skeleton({}) == {}

    def test_unknown_day_rejected(self):
        with pytest.raises(InvalidInputError):
            build_skeleton({"Caturday": {"lunch": True}})

    def test_count_slots(self):
        skeleton = build_skeleton({
            "Monday": {"lunch": True, "dinner": True},
            "Thursday": {"dinner": True},
        })
        assert count_slots(skeleton) == 3
