import logging

import pytest

from adcs_simulation.core.time_sync import ManualClock, SimulationClock, TimeSynchronizer


def test_steps_for_rounds_up_to_whole_steps():
    clock = SimulationClock(timestep_ms=10)

    assert clock.steps_for(95) == 10
    assert clock.steps_for(100) == 10
    assert clock.steps_for(1) == 1
    assert clock.steps_for(0) == 0
    assert clock.steps_for(-20) == 0


def test_clock_step_advances_by_timestep():
    clock = SimulationClock(timestep_ms=25)
    clock.step()
    clock.step()

    assert clock.simulation_time == 50
    assert clock.step_count == 2
    assert clock.timestep_seconds == pytest.approx(0.025)


def test_clock_rejects_non_positive_timestep():
    with pytest.raises(ValueError):
        SimulationClock(timestep_ms=0)


def test_first_call_measures_from_construction(wall_clock):
    sync = TimeSynchronizer(wall_clock)
    wall_clock.advance(42)

    assert sync.time_passed() == 42
    assert sync.time_passed() == 0


def test_request_accumulates_elapsed_and_sleep(wall_clock):
    sync = TimeSynchronizer(wall_clock)

    wall_clock.advance(7)
    assert sync.request(sleep_ms=20) == 27
    wall_clock.advance(3)
    assert sync.request() == 30
    assert sync.last_called == wall_clock()


def test_clock_skew_is_clamped_with_warning(wall_clock, caplog):
    sync = TimeSynchronizer(wall_clock)
    wall_clock.advance(-500)

    with caplog.at_level(logging.WARNING, logger="adcs_simulation.core.time_sync"):
        assert sync.time_passed() == 0

    assert "backwards" in caplog.text
    # Baseline follows the skewed clock so later calls measure from there
    wall_clock.advance(10)
    assert sync.time_passed() == 10


def test_negative_sleep_is_ignored(wall_clock, caplog):
    sync = TimeSynchronizer(wall_clock)

    with caplog.at_level(logging.WARNING):
        assert sync.request(sleep_ms=-50) == 0

    assert "Negative sleep" in caplog.text


def test_manual_clock_is_callable():
    clock = ManualClock(5)
    clock.advance(10)
    assert clock() == 15


def test_fractional_sleep_rounds_up(wall_clock):
    sync = TimeSynchronizer(wall_clock)

    assert sync.request(sleep_ms=2.1) == 3
    assert sync.request(sleep_ms=4.0) == 7
