"""Tests for SVG track helpers."""

import pytest

from launch_timeline.output._svg_shared import _tl_hex, _tl_num
from launch_timeline.output._svg_tracks import (
    _tl_build_key_tracks,
    _tl_compress_discrete_track,
    _tl_compress_linear_track,
    _tl_key_times_attr,
    _tl_pad_local_track,
    _tl_transition_forced_indices,
)


def test_number_and_color_formatting():
    assert _tl_num(12.0) == "12"
    assert _tl_num(0.25) == ".25"
    assert _tl_num(-0.5) == "-.5"
    assert _tl_hex((255, 255, 255)) == "#fff"
    assert _tl_hex((18, 52, 86)) == "#123456"


def test_linear_track_drops_collinear_samples():
    times, values = _tl_compress_linear_track(
        [0, 100, 200, 300], [(0.0,), (1.0,), (2.0,), (5.0,)]
    )
    assert times == [0, 200, 300]
    assert values == [(0.0,), (2.0,), (5.0,)]


def test_linear_track_keeps_forced_samples():
    times, _values = _tl_compress_linear_track(
        [0, 100, 200], [(0.0,), (1.0,), (2.0,)], forced_indices={1}
    )
    assert times == [0, 100, 200]


def test_discrete_track_keeps_changes_only():
    times, values = _tl_compress_discrete_track([0, 100, 200, 300], ["a", "a", "b", "b"])
    assert times == [0, 200]
    assert values == ["a", "b"]


def test_discrete_track_requires_samples():
    with pytest.raises(ValueError):
        _tl_compress_discrete_track([], [])


def test_pad_local_track_covers_whole_duration():
    times, values = _tl_pad_local_track([100, 200], ["x", "y"], 500)
    assert times == [0, 100, 200, 500]
    assert values == ["x", "x", "y", "y"]


def test_key_times_attr_omitted_for_full_span():
    assert _tl_key_times_attr([0, 1000], 1000) == ""
    assert _tl_key_times_attr([0, 250, 1000], 1000) == 'keyTimes="0;.25;1"'


def test_key_tracks_align_missing_frames():
    tracks = _tl_build_key_tracks([{"a": 1}, {"a": 2, "b": 3}, {}])
    assert tracks == {"a": [1, 2, None], "b": [None, 3, None]}


def test_forced_indices_surround_flips():
    assert _tl_transition_forced_indices([False, False, True, True, False]) == {1, 2, 3, 4}
