"""
Tests for the view controller: selectors, re-derivation after store changes
and memoization.
"""
from __future__ import annotations

from datetime import date
from unittest import mock

import pytest

from app.services import aggregation
from app.services.aggregation import ViewMode
from app.services.view_controller import ViewController


def _controller(store, ref=date(2024, 3, 10), mode=ViewMode.daily):
    return ViewController(store, view_mode=mode, reference_date=ref)


class TestInitialState:
    def test_defaults_to_daily_today(self, store):
        controller = ViewController(store)
        assert controller.view_mode == ViewMode.daily
        assert controller.reference_date == date.today()

    def test_empty_store_any_view(self, store):
        controller = _controller(store)
        for mode in ViewMode:
            controller.set_view_mode(mode)
            stats = controller.stats()
            assert stats.total == 0
            assert stats.completion_rate == 0
            assert controller.filtered_goals() == ()
        assert controller.yearly_series() == ()
        assert len(controller.monthly_series()) == 12


class TestScenarios:
    def test_add_and_toggle_run_5k(self, store):
        controller = _controller(store)
        goal = controller.add_goal("Run 5k")
        assert goal.date == date(2024, 3, 10)
        controller.toggle_goal(goal.id)
        stats = controller.stats()
        assert (stats.completed, stats.total, stats.completion_rate) == (1, 1, 100)

    def test_monthly_view_march_and_april(self, store):
        controller = _controller(store, ref=date(2024, 3, 15), mode=ViewMode.monthly)
        done = controller.add_goal("stretch", date(2024, 3, 1))
        controller.add_goal("read", date(2024, 3, 20))
        april = controller.add_goal("swim", date(2024, 4, 2))
        controller.toggle_goal(done.id)
        controller.toggle_goal(april.id)

        stats = controller.stats()
        assert (stats.total, stats.completed) == (2, 1)
        series = controller.monthly_series()
        assert (series[2].label, series[2].completed, series[2].total) == ("Mar", 1, 2)
        assert (series[3].label, series[3].completed, series[3].total) == ("Apr", 1, 1)

    def test_delete_only_goal_of_day(self, store):
        controller = _controller(store)
        goal = controller.add_goal("one-off")
        assert len(controller.filtered_goals()) == 1
        controller.remove_goal(goal.id)
        assert controller.filtered_goals() == ()

    def test_blank_title_changes_nothing(self, store):
        controller = _controller(store)
        before = controller.snapshot()
        assert controller.add_goal("   ") is None
        assert controller.snapshot() == before


class TestSelectors:
    def test_changing_reference_date_refilters(self, store):
        controller = _controller(store)
        controller.add_goal("a", date(2024, 3, 10))
        controller.add_goal("b", date(2024, 3, 11))
        controller.set_reference_date(date(2024, 3, 11))
        assert [g.title for g in controller.filtered_goals()] == ["b"]

    def test_changing_view_mode_refilters(self, store):
        controller = _controller(store)
        controller.add_goal("a", date(2024, 3, 10))
        controller.add_goal("b", date(2024, 7, 1))
        assert controller.stats().total == 1
        controller.set_view_mode(ViewMode.yearly)
        assert controller.stats().total == 2

    def test_period_series_follows_view(self, store):
        controller = _controller(store)
        controller.add_goal("a", date(2023, 1, 1))
        controller.add_goal("b", date(2024, 1, 1))
        assert len(controller.period_series()) == 12
        controller.set_view_mode("yearly")
        assert [p.label for p in controller.period_series()] == ["2023", "2024"]

    def test_monthly_series_for_other_year(self, store):
        controller = _controller(store)
        controller.add_goal("old", date(2020, 5, 5))
        series = controller.monthly_series(2020)
        assert series[4].total == 1
        assert sum(p.total for p in controller.monthly_series()) == 0


class TestMemoization:
    def test_repeated_reads_compute_once(self, store):
        controller = _controller(store)
        controller.add_goal("a")
        with mock.patch.object(aggregation, "filter_goals", wraps=aggregation.filter_goals) as spy:
            controller.filtered_goals()
            controller.stats()
            controller.snapshot()
        assert spy.call_count == 1

    def test_store_mutation_invalidates(self, store):
        controller = _controller(store)
        goal = controller.add_goal("a")
        assert controller.stats().completed == 0
        store.toggle(goal.id)
        assert controller.stats().completed == 1

    def test_selector_change_invalidates(self, store):
        controller = _controller(store)
        controller.add_goal("a")
        with mock.patch.object(aggregation, "filter_goals", wraps=aggregation.filter_goals) as spy:
            controller.filtered_goals()
            controller.set_reference_date(controller.reference_date)
            controller.filtered_goals()
        assert spy.call_count == 2

    def test_snapshot_bundles_everything(self, store):
        controller = _controller(store)
        controller.add_goal("a")
        snap = controller.snapshot()
        assert snap.view_mode == ViewMode.daily
        assert snap.reference_date == date(2024, 3, 10)
        assert snap.goals == controller.filtered_goals()
        assert snap.stats == controller.stats()
        assert [s.name for s in snap.status_distribution] == ["Completed", "Pending"]
        assert snap.period_series == controller.monthly_series()

    def test_derived_values_are_read_only(self, store):
        controller = _controller(store)
        controller.add_goal("a")
        goals = controller.filtered_goals()
        assert isinstance(goals, tuple)
        assert isinstance(controller.period_series(), tuple)
        assert isinstance(controller.status_distribution(), tuple)
        with pytest.raises(AttributeError):
            goals.append(goals[0])
        assert len(controller.filtered_goals()) == 1
