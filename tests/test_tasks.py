"""Tests for core task logic."""

import pytest

from calm_planner.core.tasks import (
    BUCKETS,
    PRIORITIES,
    Bucket,
    Priority,
    Task,
    TaskDraft,
    Tone,
    clamp_duration,
    create_checklist,
    create_draft,
    draft_from_task,
    group_by_bucket,
    group_by_priority,
    sort_tasks,
    tasks_for_day,
)


def make_task(id, time="09:00", done=False, priority=Priority.MEDIUM, bucket=Bucket.ANYTIME, day="2025-01-15"):
    return Task(
        id=id,
        day=day,
        title=f"Task {id}",
        time=time,
        duration=30,
        priority=priority,
        bucket=bucket,
        icon="✨",
        color=Tone.MINT,
        done=done,
    )


@pytest.fixture
def sample_tasks():
    """Mixed tasks across buckets, priorities and completion states."""
    return [
        make_task("1", time="15:00", priority=Priority.LOW, bucket=Bucket.DAY),
        make_task("2", time="07:30", done=True, priority=Priority.HIGH, bucket=Bucket.MORNING),
        make_task("3", time="08:00", priority=Priority.HIGH, bucket=Bucket.MORNING),
        make_task("4", time="19:00", priority=Priority.MEDIUM, bucket=Bucket.EVENING),
        make_task("5", time="", priority=Priority.MEDIUM, bucket=Bucket.ANYTIME),
        make_task("6", time="06:00", done=True, priority=Priority.LOW, bucket=Bucket.DAY),
    ]


class TestSortTasks:
    def test_open_before_done_then_by_time(self, sample_tasks):
        ordered = [t.id for t in sort_tasks(sample_tasks)]
        assert ordered == ["5", "3", "1", "4", "6", "2"]

    def test_done_sorts_last_even_when_earlier(self):
        early_done = make_task("a", time="06:00", done=True)
        late_open = make_task("b", time="23:00")
        assert [t.id for t in sort_tasks([early_done, late_open])] == ["b", "a"]

    def test_stable_for_same_time(self):
        tasks = [make_task(str(i), time="10:00") for i in range(5)]
        assert [t.id for t in sort_tasks(tasks)] == ["0", "1", "2", "3", "4"]

    def test_stable_for_same_time_done(self):
        tasks = [
            make_task("x", time="10:00", done=True),
            make_task("y", time="10:00"),
            make_task("z", time="10:00", done=True),
            make_task("w", time="10:00"),
        ]
        assert [t.id for t in sort_tasks(tasks)] == ["y", "w", "x", "z"]

    def test_does_not_modify_input(self, sample_tasks):
        before = list(sample_tasks)
        sort_tasks(sample_tasks)
        assert sample_tasks == before

    def test_empty(self):
        assert sort_tasks([]) == []


class TestGrouping:
    def test_group_by_bucket_has_every_bucket(self, sample_tasks):
        groups = group_by_bucket(sort_tasks(sample_tasks))
        assert list(groups) == list(BUCKETS)
        assert [t.id for t in groups[Bucket.MORNING]] == ["3", "2"]
        assert [t.id for t in groups[Bucket.DAY]] == ["1", "6"]
        assert [t.id for t in groups[Bucket.EVENING]] == ["4"]
        assert [t.id for t in groups[Bucket.ANYTIME]] == ["5"]

    def test_group_by_priority(self, sample_tasks):
        groups = group_by_priority(sort_tasks(sample_tasks))
        assert list(groups) == list(PRIORITIES)
        assert [t.id for t in groups[Priority.HIGH]] == ["3", "2"]
        assert [t.id for t in groups[Priority.MEDIUM]] == ["5", "4"]
        assert [t.id for t in groups[Priority.LOW]] == ["1", "6"]

    def test_groups_cover_source_exactly(self, sample_tasks):
        groups = group_by_priority(sample_tasks)
        assert sorted(t.id for ts in groups.values() for t in ts) == sorted(t.id for t in sample_tasks)

    def test_empty_groups_present(self):
        groups = group_by_bucket([])
        assert groups == {b: [] for b in BUCKETS}

    def test_restricted_key_set(self, sample_tasks):
        groups = group_by_priority(sample_tasks, [Priority.HIGH])
        assert list(groups) == [Priority.HIGH]

    def test_tasks_for_day(self):
        tasks = [make_task("a", day="2025-01-15"), make_task("b", day="2025-01-16")]
        assert [t.id for t in tasks_for_day(tasks, "2025-01-16")] == ["b"]


class TestDrafts:
    def test_create_draft_defaults(self):
        draft = create_draft()
        assert draft == TaskDraft(
            title="",
            time="09:00",
            duration=30,
            priority=Priority.MEDIUM,
            bucket=Bucket.ANYTIME,
            icon="✨",
            color=Tone.MINT,
        )

    def test_create_draft_bucket(self):
        assert create_draft(Bucket.EVENING).bucket == Bucket.EVENING

    def test_draft_from_task(self):
        task = make_task("a", time="13:45", priority=Priority.HIGH, bucket=Bucket.DAY)
        draft = draft_from_task(task)
        assert draft.title == "Task a"
        assert draft.time == "13:45"
        assert draft.priority == Priority.HIGH
        assert draft.bucket == Bucket.DAY

    @pytest.mark.parametrize("minutes,expected", [(-10, 5), (0, 5), (4, 5), (5, 5), (45, 45)])
    def test_clamp_duration(self, minutes, expected):
        assert clamp_duration(minutes) == expected


class TestChecklist:
    def test_three_items_from_title(self):
        items = create_checklist("Write Report")
        assert [i.label for i in items] == [
            "Open write report and start.",
            "Work one small chunk.",
            "Quick review and mark complete.",
        ]
        assert all(not i.done for i in items)

    def test_ids_are_unique(self):
        items = create_checklist("x")
        assert len({i.id for i in items}) == 3

    def test_custom_id_factory(self):
        ids = iter(["a", "b", "c"])
        items = create_checklist("x", make_id=lambda: next(ids))
        assert [i.id for i in items] == ["a", "b", "c"]
