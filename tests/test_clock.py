from __future__ import annotations

import pytest

from patched_conics.core.clock import WARP_FACTORS, Clock, ManualTimeSource


def test_time_accumulates_with_warp() -> None:
    source = ManualTimeSource()
    clock = Clock(time_source=source)
    source.advance(2.0)
    assert clock.update_time_stamp() == pytest.approx(2.0)

    clock.set_warp_factor(10.0)
    source.advance(1.0)
    clock.update_time_stamp()
    assert clock.get_time() == pytest.approx(12.0)
    assert clock.get_warp_factor() == 10.0


def test_warp_change_flushes_elapsed_time_at_old_factor() -> None:
    source = ManualTimeSource()
    clock = Clock(warp_factor=10.0, time_source=source)
    source.advance(3.0)
    clock.set_warp_factor(100.0)
    assert clock.get_time() == pytest.approx(30.0)
    source.advance(1.0)
    clock.update_time_stamp()
    assert clock.get_time() == pytest.approx(130.0)


def test_zero_warp_freezes_time() -> None:
    source = ManualTimeSource()
    clock = Clock(time_source=source)
    source.advance(1.0)
    clock.set_warp_factor(0.0)
    source.advance(50.0)
    clock.update_time_stamp()
    assert clock.get_time() == pytest.approx(1.0)


def test_time_source_going_backwards_is_ignored() -> None:
    readings = iter([10.0, 12.0, 11.0])
    clock = Clock(time_source=lambda: next(readings))
    clock.update_time_stamp()
    clock.update_time_stamp()
    assert clock.get_time() == pytest.approx(2.0)


def test_invalid_inputs() -> None:
    source = ManualTimeSource()
    with pytest.raises(ValueError, match="warp_factor must be >= 0"):
        Clock(warp_factor=-1.0, time_source=source)
    clock = Clock(time_source=source)
    with pytest.raises(ValueError, match="warp_factor must be >= 0"):
        clock.set_warp_factor(-2.0)
    with pytest.raises(ValueError, match="real_delta must be >= 0"):
        source.advance(-0.1)


def test_reset() -> None:
    source = ManualTimeSource(start=100.0)
    clock = Clock(time_source=source)
    source.advance(5.0)
    clock.update_time_stamp()
    clock.reset()
    source.advance(1.0)
    clock.update_time_stamp()
    assert clock.get_time() == pytest.approx(1.0)


def test_warp_presets() -> None:
    assert WARP_FACTORS == (
        1.0, 2.0, 4.0, 10.0, 100.0, 1e3, 1e4, 1e5, 1e6, 1e7,
    )
