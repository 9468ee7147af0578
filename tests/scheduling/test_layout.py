import random

from deptpilot.services.scheduling.types import (
    DAY_ORDER,
    Assignment,
    DayCode,
    TimeBlock,
    Worker,
)
from deptpilot.services.scheduling.layout import (
    assign_lanes,
    build_schedule_events,
    cluster_blocks,
    layout_day,
    layout_week,
    placement_geometry,
    visible_window,
)

M, T, W = DayCode.MONDAY, DayCode.TUESDAY, DayCode.WEDNESDAY


def max_clique(blocks):
    # brute force: the most blocks covering any single start point
    best = 0
    for probe in blocks:
        covering = sum(
            1 for b in blocks
            if b.start_minutes <= probe.start_minutes < b.end_minutes
        )
        best = max(best, covering)
    return best


class TestClusterBlocks:
    def test_empty(self):
        assert cluster_blocks([]) == []

    def test_disjoint_blocks_are_separate_clusters(self):
        blocks = [TimeBlock(M, 540, 600), TimeBlock(M, 660, 720)]
        assert cluster_blocks(blocks) == [[0], [1]]

    def test_touching_blocks_are_separate_clusters(self):
        blocks = [TimeBlock(M, 540, 600), TimeBlock(M, 600, 660)]
        assert cluster_blocks(blocks) == [[0], [1]]

    def test_transitive_overlap_forms_one_cluster(self):
        # a overlaps b, b overlaps c, a does not overlap c
        blocks = [TimeBlock(M, 780, 900), TimeBlock(M, 540, 660), TimeBlock(M, 600, 840)]
        assert cluster_blocks(blocks) == [[1, 2, 0]]

    def test_running_end_extends_cluster(self):
        blocks = [TimeBlock(M, 480, 1020), TimeBlock(M, 540, 600), TimeBlock(M, 900, 960)]
        assert cluster_blocks(blocks) == [[0, 1, 2]]


class TestAssignLanes:
    def test_reuses_free_lane(self):
        blocks = [TimeBlock(M, 540, 660), TimeBlock(M, 600, 720), TimeBlock(M, 660, 780)]
        lanes, count = assign_lanes(blocks)
        assert lanes == [0, 1, 0]
        assert count == 2

    def test_nested_blocks(self):
        blocks = [TimeBlock(M, 480, 1020), TimeBlock(M, 540, 600), TimeBlock(M, 600, 660)]
        lanes, count = assign_lanes(blocks)
        assert lanes == [0, 1, 1]
        assert count == 2


class TestLayoutDay:
    def test_single_block(self):
        placements = layout_day([TimeBlock(M, 540, 600)])
        assert len(placements) == 1
        assert (placements[0].lane, placements[0].lane_count) == (0, 1)

    def test_results_in_input_order(self):
        blocks = [TimeBlock(M, 600, 720), TimeBlock(M, 540, 660)]
        placements = layout_day(blocks)
        assert [p.block for p in placements] == blocks
        assert placements[0].lane == 1
        assert placements[1].lane == 0

    def test_lane_count_is_cluster_wide(self):
        # the first block sees only one lane open when placed, but its
        # cluster ends up with three
        blocks = [TimeBlock(M, 480, 720), TimeBlock(M, 540, 720), TimeBlock(M, 600, 720), TimeBlock(M, 780, 840)]
        placements = layout_day(blocks)
        assert [p.lane_count for p in placements] == [3, 3, 3, 1]
        assert [p.lane for p in placements] == [0, 1, 2, 0]
        assert placements[3].cluster != placements[0].cluster

    def test_ties_keep_input_order(self):
        blocks = [TimeBlock(M, 540, 600), TimeBlock(M, 540, 600), TimeBlock(M, 540, 600)]
        placements = layout_day(blocks)
        assert [p.lane for p in placements] == [0, 1, 2]
        again = layout_day(blocks)
        assert again == placements

    def test_same_lane_never_overlaps_and_lane_count_is_optimal(self):
        rng = random.Random(42)
        for _ in range(200):
            blocks = []
            for _ in range(rng.randint(1, 9)):
                start = rng.randrange(480, 1000, 30)
                end = rng.randrange(start + 30, 1051, 30)
                blocks.append(TimeBlock(M, start, end))

            placements = layout_day(blocks)
            for i, a in enumerate(placements):
                for b in placements[i + 1:]:
                    if a.cluster == b.cluster and a.lane == b.lane:
                        assert not (
                            a.block.start_minutes < b.block.end_minutes
                            and b.block.start_minutes < a.block.end_minutes
                        )

            for cluster in {p.cluster for p in placements}:
                members = [p for p in placements if p.cluster == cluster]
                lane_count = members[0].lane_count
                assert all(p.lane_count == lane_count for p in members)
                assert max(p.lane for p in members) + 1 == lane_count
                assert lane_count == max_clique([p.block for p in members])

    def test_geometry(self):
        blocks = [TimeBlock(M, 540, 660), TimeBlock(M, 600, 720)]
        placements = layout_day(blocks)
        assert placement_geometry(placements[0]) == (0.0, 50.0)
        assert placement_geometry(placements[1]) == (50.0, 50.0)
        assert placements[1].left_pct == 50.0
        assert placements[1].width_pct == 50.0


class TestLayoutWeek:
    def test_events_tagged_by_assignment(self):
        worker = Worker(assignments=[
            Assignment(title="Front Desk", blocks=[TimeBlock(M, 540, 720)]),
            Assignment(blocks=[TimeBlock(M, 660, 780), TimeBlock(T, 540, 600)]),
        ])
        events = build_schedule_events(worker)
        assert [(e.assignment_index, e.assignment_title) for e in events] == [
            (0, "Front Desk"), (1, "Assignment 2"), (1, "Assignment 2"),
        ]

    def test_layout_week_groups_by_day(self):
        assignments = [
            Assignment(title="A", blocks=[TimeBlock(M, 540, 720), TimeBlock(W, 540, 600)]),
            Assignment(title="B", blocks=[TimeBlock(M, 660, 780), TimeBlock(DayCode.SATURDAY, 1080, 1320)]),
        ]
        week = layout_week(build_schedule_events(assignments))
        assert list(week) == list(DAY_ORDER)
        assert [(p.event.assignment_title, p.lane, p.lane_count) for p in week[M]] == [("A", 0, 2), ("B", 1, 2)]
        assert [(p.lane, p.lane_count) for p in week[W]] == [(0, 1)]
        assert len(week[DayCode.SATURDAY]) == 1
        assert week[T] == []


class TestVisibleWindow:
    def test_default_when_empty(self):
        assert visible_window([]) == (480, 1020)

    def test_business_hours(self):
        assert visible_window([TimeBlock(M, 600, 720)]) == (540, 1020)

    def test_early_morning_block(self):
        assert visible_window([TimeBlock(M, 450, 600)]) == (450, 1020)

    def test_clamped_to_six_and_ten(self):
        assert visible_window([TimeBlock(M, 240, 600), TimeBlock(T, 1200, 1410)]) == (360, 1320)

    def test_evening_block_extends_end(self):
        assert visible_window([TimeBlock(M, 1080, 1200)]) == (540, 1200)
