from pltr.models import Instance, Job, Schedule
from pltr.rendering import format_instance, format_job, format_schedule


def test_format_job_aligns_with_slots() -> None:
    assert format_job(Job(id=0, r=1, d=3, p=1)) == "    [---|---]p:1, id:0"
    assert format_job(Job(id=4, r=0, d=1, p=1)) == "[---]p:1, id:4"
    assert format_job(Job(id=2, r=0, d=4, p=2)) == "[---|---|---|---]p:2, id:2"


def test_format_instance() -> None:
    instance = Instance(jobs=(Job(id=0, r=0, d=2, p=1),), m=2, q=1)
    assert format_instance(instance).splitlines() == [
        "d_max: 2, m: 2, p_total: 1, q: 1",
        "|000|001|",
        "[---|---]p:1, id:0",
    ]


def test_format_schedule_stacks_levels_top_down() -> None:
    schedule = Schedule.from_lists([[0], [], [1, 2]], m=3)
    assert format_schedule(schedule).splitlines() == [
        "|---|---|---|",
        "|---|---|002|",
        "|000|---|001|",
        "|   |   |   |",
        "|000|001|002|",
    ]
