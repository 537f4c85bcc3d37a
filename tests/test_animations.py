import pytest

from animations import Tween, ease_in_out


def test_easing_ends_are_exact():
    assert ease_in_out(0.0) == 0.0
    assert ease_in_out(1.0) == 1.0
    assert ease_in_out(0.5) == pytest.approx(0.5)
    assert ease_in_out(-1.0) == 0.0
    assert ease_in_out(2.0) == 1.0


def test_tween_reports_progress_then_completes_once():
    updates, completions = [], []
    tween = Tween(1.0, on_update=updates.append,
                  on_complete=lambda: completions.append(updates[-1]), easing=lambda t: t)

    assert tween.advance(0.25) is False
    assert tween.advance(0.25) is False
    assert tween.advance(1.0) is True
    assert tween.advance(1.0) is True

    assert updates == [0.25, 0.5, 1.0]
    assert completions == [1.0]
    assert not tween.active


def test_zero_duration_completes_on_first_advance():
    completions = []
    tween = Tween(0.0, on_complete=lambda: completions.append(True))
    assert tween.advance(0.0) is True
    assert completions == [True]


def test_cancelled_tween_never_completes():
    completions = []
    tween = Tween(1.0, on_complete=lambda: completions.append(True))
    tween.advance(0.5)
    tween.cancel()
    tween.advance(1.0)
    assert completions == []
    assert not tween.active
