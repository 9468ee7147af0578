"""
Timeline layout for a day of blocks drawn from several assignments.

Blocks from different assignments may overlap. They are grouped into
overlap clusters and each block gets a lane within its cluster, so a
renderer can place it at left = lane * (100 / lane_count) percent with
width 100 / lane_count percent.
"""

from collections.abc import Iterable, Sequence
from typing import Union

from .types import (
    DAY_ORDER,
    Assignment,
    BlockPlacement,
    DayCode,
    EventPlacement,
    ScheduleEvent,
    TimeBlock,
    Worker,
)


DEFAULT_VIEW_START = 8 * 60
DEFAULT_VIEW_END = 17 * 60
EARLIEST_VIEW_START = 6 * 60
LATEST_VIEW_END = 22 * 60
LATEST_DEFAULT_START = 9 * 60


def _start_order(blocks: Sequence[TimeBlock]) -> list[int]:
    # sorted() is stable, so equal (start, end) pairs keep input order
    return sorted(
        range(len(blocks)),
        key=lambda i: (blocks[i].start_minutes, blocks[i].end_minutes),
    )


def cluster_blocks(blocks: Sequence[TimeBlock]) -> list[list[int]]:
    """
    Group blocks into clusters of transitively overlapping blocks.

    Returns:
        Lists of input indices, each list in start order. A block whose
        start is at or after the running end of the current cluster
        begins a new cluster.
    """
    clusters: list[list[int]] = []
    current: list[int] = []
    running_end = None

    for index in _start_order(blocks):
        block = blocks[index]
        if current and block.start_minutes < running_end:
            current.append(index)
            running_end = max(running_end, block.end_minutes)
            continue
        if current:
            clusters.append(current)
        current = [index]
        running_end = block.end_minutes

    if current:
        clusters.append(current)
    return clusters


def assign_lanes(blocks: Sequence[TimeBlock]) -> tuple[list[int], int]:
    """
    Greedy lane assignment for one cluster of start-ordered blocks.

    Each block takes the lowest lane whose last block has ended by the
    block's start; a new lane is opened when none is free.

    Returns:
        (lane per block, number of lanes opened)
    """
    lane_ends: list[int] = []
    lanes = []
    for block in blocks:
        for lane, lane_end in enumerate(lane_ends):
            if lane_end <= block.start_minutes:
                lane_ends[lane] = block.end_minutes
                lanes.append(lane)
                break
        else:
            lane_ends.append(block.end_minutes)
            lanes.append(len(lane_ends) - 1)
    return lanes, len(lane_ends)


def layout_day(blocks: Sequence[TimeBlock]) -> list[BlockPlacement]:
    """
    Lay out one day's blocks.

    Returns:
        One placement per input block, in input order.
    """
    placements: list[BlockPlacement] = [None] * len(blocks)
    for cluster_id, indices in enumerate(cluster_blocks(blocks)):
        lanes, lane_count = assign_lanes([blocks[i] for i in indices])
        for index, lane in zip(indices, lanes):
            placements[index] = BlockPlacement(
                block=blocks[index],
                lane=lane,
                lane_count=lane_count,
                cluster=cluster_id,
            )
    return placements


def build_schedule_events(
    source: Union[Worker, Iterable[Assignment]],
) -> list[ScheduleEvent]:
    """Flatten every assignment's blocks into events tagged by assignment."""
    assignments = source.assignments if isinstance(source, Worker) else list(source)
    events = []
    for index, assignment in enumerate(assignments):
        title = assignment.title or f"Assignment {index + 1}"
        for block in assignment.blocks:
            events.append(ScheduleEvent(block=block, assignment_index=index, assignment_title=title))
    return events


def layout_week(events: Iterable[ScheduleEvent]) -> dict[DayCode, list[EventPlacement]]:
    """Lay out events per day. All seven days are present in the result."""
    by_day: dict[DayCode, list[ScheduleEvent]] = {day: [] for day in DAY_ORDER}
    for event in events:
        by_day[event.block.day].append(event)

    week = {}
    for day, day_events in by_day.items():
        placements = layout_day([e.block for e in day_events])
        week[day] = [
            EventPlacement(event=event, lane=p.lane, lane_count=p.lane_count, cluster=p.cluster)
            for event, p in zip(day_events, placements)
        ]
    return week


def visible_window(blocks: Iterable[TimeBlock]) -> tuple[int, int]:
    """
    Display bounds for a week view.

    The view always spans at least 09:00-17:00 once data exists, grows to
    fit earlier or later blocks, and is clamped to 06:00-22:00.
    """
    blocks = list(blocks)
    if not blocks:
        return DEFAULT_VIEW_START, DEFAULT_VIEW_END

    earliest = min(b.start_minutes for b in blocks)
    latest = max(b.end_minutes for b in blocks)
    start = max(EARLIEST_VIEW_START, min(earliest, LATEST_DEFAULT_START))
    end = min(LATEST_VIEW_END, max(latest, DEFAULT_VIEW_END))
    return start, end


def placement_geometry(placement: Union[BlockPlacement, EventPlacement]) -> tuple[float, float]:
    """(left %, width %) of a placement."""
    width = 100 / placement.lane_count
    return placement.lane * width, width
