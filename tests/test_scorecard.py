"""Tests for the scorecard state-transition engine."""

from __future__ import annotations

import pytest

from conftest import card, make_ball
from livescore.events.schema import BallEvent, ExtraType
from livescore.state.scorecard import (
    Scorecard,
    ScorecardInvariantError,
    apply_event,
    build_scorecard_from_events,
    format_scorecard,
)


class TestExampleScenarios:
    def test_single_rotates_strike(self):
        after = apply_event(card(0, "0.0", 0, 0), make_ball(runs=1))
        assert after == card(1, "0.1", 0, 1)

    def test_dot_ball_keeps_strike(self):
        after = apply_event(card(1, "0.1", 0, 1), make_ball())
        assert after == card(1, "0.2", 0, 1)

    def test_wide_plus_three(self):
        after = apply_event(
            card(1, "0.2", 0, 1),
            make_ball(extra_type=ExtraType.WIDE, extra_runs=4),
        )
        assert after == card(5, "0.2", 0, 0)

    def test_sixth_legal_ball_completes_over(self):
        after = apply_event(card(5, "0.5", 0, 0), make_ball())
        assert after == card(5, "1.0", 0, 1)

    def test_wicket_on_dot_ball(self):
        after = apply_event(card(5, "1.0", 0, 1), make_ball(wicket=True))
        assert after == card(5, "1.1", 1, 1)

    def test_ignore_leaves_state_unchanged(self):
        before = card(164, "19.4", 8, 1)
        assert apply_event(before, BallEvent.ignored()) is before


class TestStrikeParity:
    @pytest.mark.parametrize("runs,toggles", [(0, False), (1, True), (2, False), (3, True), (4, False), (6, False)])
    def test_legal_delivery(self, runs, toggles):
        after = apply_event(card(0, "0.0", 0, 0), make_ball(runs=runs))
        assert after.on_strike == (1 if toggles else 0)

    @pytest.mark.parametrize("extra", [ExtraType.BYE, ExtraType.LEG_BYE])
    def test_byes_rotate_on_odd_runs(self, extra):
        after = apply_event(card(0, "0.0", 0, 0), make_ball(extra_type=extra, extra_runs=1))
        assert after.on_strike == 1
        assert after.runs == 1
        assert after.balls_in_current_over == 1

    @pytest.mark.parametrize(
        "runs,extra_runs,toggles",
        [
            (0, 1, False),  # plain no ball: penalty only
            (1, 1, True),   # no ball + 1 run
            (3, 1, True),   # no ball + 3
            (4, 1, False),  # no ball + 4
        ],
    )
    def test_no_ball_penalty_never_rotates(self, runs, extra_runs, toggles):
        after = apply_event(
            card(0, "0.3", 0, 0),
            make_ball(runs=runs, extra_type=ExtraType.NO_BALL, extra_runs=extra_runs),
        )
        assert after.on_strike == (1 if toggles else 0)

    def test_plain_wide_does_not_rotate(self):
        after = apply_event(card(0, "0.0", 0, 0), make_ball(extra_type=ExtraType.WIDE, extra_runs=1))
        assert after.on_strike == 0
        assert after.runs == 1


class TestOverProgression:
    @pytest.mark.parametrize("extra", [ExtraType.WIDE, ExtraType.NO_BALL])
    def test_illegal_delivery_does_not_count(self, extra):
        before = card(10, "3.5", 2, 0)
        after = apply_event(before, make_ball(extra_type=extra, extra_runs=1))
        assert (after.over_count, after.balls_in_current_over) == (3, 5)

    def test_odd_runs_on_last_ball_rotate_twice(self):
        after = apply_event(card(20, "2.5", 0, 0), make_ball(runs=1))
        assert after == card(21, "3.0", 0, 0)

    def test_leg_bye_counts_as_legal_ball(self):
        after = apply_event(card(0, "0.5", 0, 0), make_ball(extra_type=ExtraType.LEG_BYE, extra_runs=1))
        assert (after.over_count, after.balls_in_current_over) == (1, 0)
        assert after.on_strike == 0

    def test_full_over_of_dots(self):
        state = build_scorecard_from_events([make_ball()] * 6)
        assert state == card(0, "1.0", 0, 1)

    def test_overs_display(self):
        assert card(0, "19.4", 0, 0).overs_display() == "19.4"
        assert card(0, "19.4", 0, 0).legal_balls == 118


class TestExtrasAccounting:
    def test_no_ball_penalty_not_added_twice(self):
        after = apply_event(
            card(100, "10.2", 3, 0),
            make_ball(runs=3, extra_type=ExtraType.NO_BALL, extra_runs=1, free_hit=True),
        )
        assert after.runs == 104

    def test_free_hit_flag_has_no_effect(self):
        with_flag = apply_event(card(0, "0.0", 0, 0), make_ball(runs=2, free_hit=True))
        without = apply_event(card(0, "0.0", 0, 0), make_ball(runs=2))
        assert with_flag == without


class TestWickets:
    def test_wicket_counter_wraps_after_ten(self):
        after = apply_event(card(150, "18.0", 10, 0), make_ball(wicket=True))
        assert after.wickets == 0

    def test_wrap_can_be_disabled(self):
        after = apply_event(card(150, "18.0", 10, 0), make_ball(wicket=True), wicket_modulus=None)
        assert after.wickets == 11

    def test_negative_modulus_keeps_plain_counter(self):
        after = apply_event(card(150, "18.0", 10, 0), make_ball(wicket=True), wicket_modulus=-5)
        assert after.wickets == 11

    def test_wicket_on_free_hit_still_counts(self):
        after = apply_event(card(0, "0.0", 0, 0), make_ball(wicket=True, free_hit=True))
        assert after.wickets == 1


class TestPurity:
    def test_input_state_is_not_modified(self):
        before = card(10, "1.5", 1, 0)
        apply_event(before, make_ball(runs=3))
        assert before == card(10, "1.5", 1, 0)

    def test_same_input_same_output(self):
        before = card(10, "1.5", 1, 0)
        event = make_ball(runs=1, wicket=True)
        assert apply_event(before, event) == apply_event(before, event)

    def test_ignore_returns_even_invalid_state_unchanged(self):
        bad = Scorecard(balls_in_current_over=6)
        assert apply_event(bad, BallEvent.ignored()) is bad

    @pytest.mark.parametrize(
        "bad",
        [
            Scorecard(balls_in_current_over=6),
            Scorecard(balls_in_current_over=-1),
            Scorecard(on_strike=2),
            Scorecard(runs=-1),
        ],
    )
    def test_rejects_invalid_state(self, bad):
        with pytest.raises(ScorecardInvariantError):
            apply_event(bad, make_ball())


def test_build_from_events_applies_in_order():
    events = [
        make_ball(runs=1),
        make_ball(),
        make_ball(extra_type=ExtraType.WIDE, extra_runs=4),
        make_ball(runs=4),
        make_ball(runs=6),
        BallEvent.ignored(),
        make_ball(wicket=True),
        make_ball(runs=2),
    ]
    state = build_scorecard_from_events(events)
    # 1 + 0 + 4 + 4 + 6 + 0 + 2 runs; six legal balls close the first over
    assert state == card(17, "1.0", 1, 1)


def test_build_from_events_starts_from_initial():
    initial = card(164, "19.4", 8, 0)
    state = build_scorecard_from_events([make_ball(runs=6)], initial=initial)
    assert state == card(170, "19.5", 8, 0)


def test_format_scorecard():
    assert format_scorecard(card(164, "19.4", 8, 1)) == "164/8 (19.4 ov) on_strike=1"
