"""Timeline track compression helpers for SVG output."""

from typing import TypeVar

from ._svg_shared import _tl_num_key_time


_TrackValue = TypeVar("_TrackValue")
_PoolValue = TypeVar("_PoolValue")


def _tl_build_key_tracks(
    frame_maps: list[dict[str, _PoolValue]],
) -> dict[str, list[_PoolValue | None]]:
    """Align per-frame payloads by key; frames missing a key hold None."""
    tracks: dict[str, list[_PoolValue | None]] = {}
    for frame_index, frame_map in enumerate(frame_maps):
        for key, payload in frame_map.items():
            track = tracks.setdefault(key, [None] * len(frame_maps))
            track[frame_index] = payload
    return tracks


def _tl_compress_linear_track(
    times: list[int],
    values: list[tuple[float, ...]],
    forced_indices: set[int] | None = None,
    eps: float = 1e-6,
) -> tuple[list[int], list[tuple[float, ...]]]:
    """Drop samples that lie on the straight line between their neighbours."""
    if not times or not values or len(times) != len(values):
        return [0], [values[0] if values else (0.0,)]
    if len(times) <= 2:
        return list(times), list(values)

    forced = forced_indices or set()
    keep = [0]
    for i in range(1, len(values) - 1):
        if i in forced:
            keep.append(i)
            continue
        t0, t1, t2 = times[i - 1], times[i], times[i + 1]
        if t1 == t0 or t2 == t1:
            keep.append(i)
            continue
        for prev, cur, nxt in zip(values[i - 1], values[i], values[i + 1]):
            slope_1 = (cur - prev) / (t1 - t0)
            slope_2 = (nxt - cur) / (t2 - t1)
            if abs(slope_1 - slope_2) > eps:
                keep.append(i)
                break
    keep.append(len(values) - 1)
    return [times[i] for i in keep], [values[i] for i in keep]


def _tl_compress_discrete_track(
    times: list[int], values: list[_TrackValue]
) -> tuple[list[int], list[_TrackValue]]:
    """Keep only the samples where the value changes."""
    if not times or not values or len(times) != len(values):
        raise ValueError("Discrete track requires matched time/value samples")

    compact_times = [times[0]]
    compact_values = [values[0]]
    for i in range(1, len(values)):
        if times[i] == compact_times[-1]:
            compact_values[-1] = values[i]
            continue
        if values[i] == compact_values[-1]:
            continue
        compact_times.append(times[i])
        compact_values.append(values[i])
    return compact_times, compact_values


def _tl_pad_local_track(
    times: list[int], values: list[_TrackValue], duration_ms: int
) -> tuple[list[int], list[_TrackValue]]:
    if not times or not values or len(times) != len(values):
        raise ValueError("Local track requires matched time/value samples")

    padded_times = list(times)
    padded_values = list(values)
    if padded_times[0] > 0:
        padded_times.insert(0, 0)
        padded_values.insert(0, padded_values[0])
    if padded_times[-1] < duration_ms:
        padded_times.append(duration_ms)
        padded_values.append(padded_values[-1])
    elif padded_times[-1] > duration_ms:
        padded_times[-1] = duration_ms
    merged_times = [padded_times[0]]
    merged_values = [padded_values[0]]
    for index in range(1, len(padded_times)):
        if padded_times[index] == merged_times[-1]:
            merged_values[-1] = padded_values[index]
            continue
        merged_times.append(padded_times[index])
        merged_values.append(padded_values[index])

    return merged_times, merged_values


def _tl_transition_forced_indices(flags: list[bool]) -> set[int]:
    """Indices on either side of a visibility flip, which must survive compression."""
    forced: set[int] = set()
    for i in range(1, len(flags)):
        if flags[i] != flags[i - 1]:
            forced.add(i - 1)
            forced.add(i)
    return forced


def _tl_key_times(times: list[int], total_duration_ms: int) -> str:
    if total_duration_ms <= 0:
        return "0;1"
    return ";".join(_tl_num_key_time(time / total_duration_ms) for time in times)


def _tl_key_times_attr(times: list[int], total_duration_ms: int) -> str:
    if len(times) == 2 and times[0] == 0 and times[1] == total_duration_ms:
        return ""
    return f'keyTimes="{_tl_key_times(times, total_duration_ms)}"'


def _tl_has_distinct_values(values: list[_TrackValue]) -> bool:
    if not values:
        return False
    first = values[0]
    return any(value != first for value in values[1:])
