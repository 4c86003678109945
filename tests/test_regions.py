import pytest

from flowcomp.regions import CHANGE_MARKERS, START_MARKERS, RegionState, RegionTracker, next_state


@pytest.mark.parametrize("marker", sorted(START_MARKERS))
def test_start_markers_enter_compensation(marker):
    assert next_state(RegionState.IDLE, marker) is RegionState.COMPENSATING
    assert next_state(RegionState.IDLE, f"  {marker}  ") is RegionState.COMPENSATING


def test_start_marker_keeps_compensating():
    assert next_state(RegionState.COMPENSATING, ";TYPE:Top surface") is RegionState.COMPENSATING


@pytest.mark.parametrize("line", [";TYPE:External perimeter", "; FEATURE: Outer wall", "G1 X1 ;TYPE:Skirt"])
def test_change_markers_leave_compensation(line):
    assert next_state(RegionState.COMPENSATING, line) is RegionState.IDLE


def test_change_marker_while_idle_is_ignored():
    assert next_state(RegionState.IDLE, ";TYPE:Perimeter") is RegionState.IDLE


@pytest.mark.parametrize("line", [";TYPE:Solid infill extra", ";TYPE:solid infill"])
def test_start_marker_requires_exact_text(line):
    assert next_state(RegionState.IDLE, line) is RegionState.IDLE


def test_other_lines_do_not_transition():
    for state in RegionState:
        assert next_state(state, "G1 X1 Y1 E0.2") is state
        assert next_state(state, ";LAYER_CHANGE") is state


def test_tracker_sequence():
    tracker = RegionTracker()
    assert not tracker.compensating
    tracker.update(";TYPE:Solid infill")
    assert tracker.compensating
    tracker.update("G1 X1 Y1 E1")
    assert tracker.compensating
    tracker.update(";TYPE:Perimeter")
    assert tracker.state is RegionState.IDLE


def test_generic_markers():
    assert CHANGE_MARKERS == (";TYPE:", "; FEATURE:")
