from __future__ import annotations

import pytest

from models.errors import ConfigurationError
from models.interaction import SessionState
from models.slider_model import SliderConfig


def test_blocking_drag_end_to_end(make_engine, event_log) -> None:
    engine = make_engine(value=[0, 100], min_distance=10)

    assert engine.start_drag(0, position=0.0, track_length=100.0)
    assert engine.drag_to(95.0)
    assert engine.end_drag()

    assert engine.values == (90.0, 100.0)
    assert event_log.events == [
        ("before", [0.0, 100.0]),
        ("change", [90.0, 100.0]),
        ("after", [90.0, 100.0]),
    ]


def test_pearling_drag_end_to_end(make_engine) -> None:
    engine = make_engine(value=[20, 30], min_distance=10, pearling=True)

    engine.start_drag(0, position=20.0, track_length=100.0)
    engine.drag_to(35.0)
    engine.end_drag()

    assert engine.get_value() == [35.0, 45.0]


def test_change_fires_once_per_altering_move(make_engine, event_log) -> None:
    engine = make_engine(value=[0, 100], min_distance=10)
    engine.start_drag(0, position=0.0, track_length=100.0)
    engine.drag_to(40.0)
    engine.drag_to(40.2)
    engine.drag_to(95.0)
    engine.drag_to(99.0)
    engine.end_drag()

    assert event_log.values_of("change") == [[40.0, 100.0], [90.0, 100.0]]


def test_inverted_engine_drags_backwards(make_engine) -> None:
    engine = make_engine(value=50, invert=True)
    engine.start_drag(0, position=50.0, track_length=100.0)
    engine.drag_to(40.0)
    assert engine.get_value() == 60.0


def test_single_handle_reports_scalar(make_engine, event_log) -> None:
    engine = make_engine(value=50)
    engine.nudge(+1)
    assert engine.get_value() == 51.0
    assert event_log.events == [("change", 51.0)]


def test_keyboard_nudge_uses_modifier_multiplier(make_engine) -> None:
    engine = make_engine(value=50)
    engine.nudge(+1)
    assert engine.get_value() == 51.0
    engine.nudge(+1, modifier=True)
    assert engine.get_value() == 61.0
    engine.nudge(-1, modifier=True)
    assert engine.get_value() == 51.0


def test_keyboard_nudge_respects_page_multiplier_and_bounds(make_engine) -> None:
    engine = make_engine(value=90, step=2, page_multiplier=3)
    engine.nudge(+1, modifier=True)
    assert engine.get_value() == 96.0
    engine.nudge(+1, modifier=True)
    assert engine.get_value() == 100.0


def test_nudge_targets_front_handle_when_idle(make_engine) -> None:
    engine = make_engine(value=[10, 50, 90])
    engine.start_drag(0, position=10.0, track_length=100.0)
    engine.end_drag()
    engine.nudge(+1)
    assert engine.values == (11.0, 50.0, 90.0)


def test_focus_session_targets_focused_handle(make_engine, event_log) -> None:
    engine = make_engine(value=[10, 50, 90])
    assert engine.focus(1)
    assert engine.active_index == 1
    engine.nudge(-1)
    engine.blur()

    assert engine.values == (10.0, 49.0, 90.0)
    assert engine.active_index is None
    assert event_log.names() == ["before", "change", "after"]


def test_move_without_active_handle_is_ignored(make_engine, event_log) -> None:
    engine = make_engine(value=[0, 100])
    assert not engine.drag_to(50.0)
    assert not engine.end_drag()
    assert engine.values == (0.0, 100.0)
    assert event_log.events == []


def test_out_of_range_index_is_rejected_without_mutation(make_engine, event_log) -> None:
    engine = make_engine(value=[0, 100])
    assert not engine.start_drag(5, position=0.0, track_length=100.0)
    assert not engine.focus(-1)
    assert not engine.move_handle(2, 50.0)
    assert not engine.nudge(+1, index=9)
    assert engine.values == (0.0, 100.0)
    assert engine.session_state is SessionState.IDLE
    assert event_log.events == []


def test_disabled_engine_ignores_interaction(make_engine, event_log) -> None:
    engine = make_engine(value=[0, 100], disabled=True)
    assert not engine.start_drag(0, position=0.0, track_length=100.0)
    assert not engine.nudge(+1)
    assert not engine.move_handle(0, 40.0)
    assert engine.press_track(40.0, 100.0) is None
    assert engine.click_track(40.0, 100.0) is None
    assert event_log.events == []


def test_drag_brings_handle_to_front_and_keeps_stacking(make_engine) -> None:
    engine = make_engine(value=[10, 50, 90])
    engine.start_drag(0, position=10.0, track_length=100.0)
    assert engine.active_index == 0
    assert engine.handles.z_order == (1, 2, 0)
    engine.end_drag()
    assert engine.active_index is None
    assert engine.handles.z_order == (1, 2, 0)


def test_move_handle_resolves_typed_value(make_engine, event_log) -> None:
    engine = make_engine(value=[10, 90], min_distance=5)
    assert engine.move_handle(0, 120.0)
    assert engine.values == (85.0, 90.0)
    assert not engine.move_handle(0, 85.2)
    assert event_log.names() == ["change"]


def test_external_value_is_reconciled_silently(make_engine, event_log) -> None:
    engine = make_engine(value=[10, 90])
    assert engine.set_value([20.4, 140]) == (20.0, 100.0)
    assert engine.set_value(None) == (20.0, 100.0)
    assert event_log.events == []


def test_declared_handle_count_shapes_the_sequence(make_engine) -> None:
    engine = make_engine(value=[10, 20], handle_count=3)
    assert engine.values == (0.0, 50.0, 100.0)
    engine.set_value([1, 2, 3])
    assert engine.values == (1.0, 2.0, 3.0)
    engine.set_value([5, 6])
    assert engine.values == (1.0, 2.0, 3.0)


def test_default_value_is_used_without_value(make_engine) -> None:
    assert make_engine().get_value() == 0.0
    assert make_engine(default_value=[25, 75]).get_value() == [25.0, 75.0]


def test_invalid_configuration_is_reported_up_front(make_engine) -> None:
    with pytest.raises(ConfigurationError):
        make_engine(value=[0, 100], step=0)
    with pytest.raises(ConfigurationError):
        make_engine(value=[0, 100], minimum=100, maximum=100)
    with pytest.raises(ConfigurationError):
        make_engine(value=[0, 100], min_distance=-1)
    with pytest.raises(ConfigurationError):
        make_engine(value=[0, 50, 100], min_distance=60)
    with pytest.raises(ConfigurationError):
        make_engine(value=[80, 20])


def test_configure_rederives_values_for_new_bounds(make_engine) -> None:
    engine = make_engine(value=[0, 100])
    values = engine.configure(SliderConfig(maximum=50, step=5))
    assert values == (0.0, 50.0)
    assert engine.bounds.maximum == 50.0


def test_configure_rejects_unsatisfiable_bounds_without_commit(make_engine) -> None:
    engine = make_engine(value=[0, 50, 100])
    with pytest.raises(ConfigurationError):
        engine.configure(SliderConfig(min_distance=60))
    assert engine.values == (0.0, 50.0, 100.0)
    assert engine.config.min_distance == 0.0


def test_configure_cancels_running_session(make_engine, event_log) -> None:
    engine = make_engine(value=[0, 100])
    engine.start_drag(0, position=0.0, track_length=100.0)
    engine.configure(SliderConfig(pearling=True))
    assert engine.session_state is SessionState.IDLE
    assert event_log.names() == ["before", "after"]


def test_track_press_snaps_closest_handle_and_starts_drag(make_engine, event_log) -> None:
    engine = make_engine(value=[20, 80])

    assert engine.press_track(70.0, 100.0) == 1
    assert engine.values == (20.0, 70.0)
    assert engine.session_state is SessionState.ACTIVE
    engine.drag_to(75.0)
    engine.end_drag()

    assert engine.values == (20.0, 75.0)
    assert event_log.names() == ["change", "before", "change", "after"]


def test_track_press_ties_go_to_later_handle(make_engine) -> None:
    engine = make_engine(value=[40, 60])
    assert engine.press_track(50.0, 100.0) == 1
    assert engine.values == (40.0, 50.0)


def test_track_press_rejected_when_too_close(make_engine, event_log) -> None:
    engine = make_engine(value=[20, 30], min_distance=10)
    assert engine.press_track(26.0, 100.0) is None
    assert engine.values == (20.0, 30.0)
    assert engine.session_state is SessionState.IDLE
    assert event_log.events == []


def test_track_press_respects_snap_drag_disabled(make_engine) -> None:
    engine = make_engine(value=[20, 80], snap_drag_disabled=True)
    assert engine.press_track(70.0, 100.0) is None
    assert engine.values == (20.0, 80.0)


def test_click_reports_value_when_press_did_not_drag(make_engine, event_log) -> None:
    engine = make_engine(value=[20, 80], snap_drag_disabled=True)
    engine.press_track(40.4, 100.0)
    assert engine.click_track(40.4, 100.0) == 40.0
    assert event_log.values_of("click") == [40.0]


def test_click_after_snap_without_motion(make_engine, event_log) -> None:
    engine = make_engine(value=[20, 80])
    engine.press_track(70.0, 100.0)
    engine.end_drag()
    assert engine.click_track(70.0, 100.0) == 70.0


def test_click_suppressed_after_drag(make_engine, event_log) -> None:
    engine = make_engine(value=[20, 80])
    engine.press_track(70.0, 100.0)
    engine.drag_to(72.0)
    engine.end_drag()
    assert engine.click_track(72.0, 100.0) is None
    assert event_log.values_of("click") == []


def test_click_position_honours_invert(make_engine) -> None:
    engine = make_engine(value=50, invert=True, snap_drag_disabled=True)
    assert engine.click_track(25.0, 100.0) == 75.0


def test_touch_scroll_gesture_leaves_values_alone(make_engine, event_log) -> None:
    engine = make_engine(value=[20, 80])
    engine.start_drag(0, position=20.0, track_length=100.0, orthogonal=5.0, detect_gesture=True)
    assert engine.session_state is SessionState.DETECTING_GESTURE
    engine.drag_to(22.0, orthogonal=40.0)

    assert engine.session_state is SessionState.IDLE
    assert engine.active_index is None
    assert engine.values == (20.0, 80.0)
    assert event_log.names() == ["before", "after"]


def test_crowded_initial_value_is_spread_and_stays_ordered(make_engine) -> None:
    engine = make_engine(value=[50, 52, 54], min_distance=10)
    assert engine.values == (50.0, 60.0, 70.0)

    engine.move_handle(1, 53.0)
    assert engine.values == (50.0, 60.0, 70.0)
    engine.move_handle(1, 75.0)
    assert engine.values == (50.0, 60.0, 70.0)


def test_crowded_external_value_is_spread(make_engine, event_log) -> None:
    engine = make_engine(value=[0, 100], min_distance=10)
    assert engine.set_value([97, 99]) == (90.0, 100.0)
    assert event_log.events == []


def test_set_value_with_new_arity_cancels_running_drag(make_engine, event_log) -> None:
    engine = make_engine(value=[10, 50])
    engine.start_drag(0, position=10.0, track_length=100.0)

    engine.set_value([10, 50, 90])

    assert engine.session_state is SessionState.IDLE
    assert engine.active_index is None
    assert event_log.events == [("before", [10.0, 50.0]), ("after", [10.0, 50.0])]
    assert not engine.drag_to(60.0)
    assert engine.values == (10.0, 50.0, 90.0)


def test_set_value_with_same_arity_keeps_drag_running(make_engine) -> None:
    engine = make_engine(value=[10, 50])
    engine.start_drag(0, position=10.0, track_length=100.0)
    engine.set_value([20, 50])
    assert engine.session_state is SessionState.ACTIVE
    assert engine.active_index == 0
