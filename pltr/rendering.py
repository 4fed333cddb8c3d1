"""Fixed-width text rendering of jobs, instances and schedules.

Every time slot is a three character column, so job windows drawn by
``format_job`` line up under the slot header printed by ``format_instance``.
"""

from __future__ import annotations

from pltr.models import Instance, Job, Schedule


def _slot_header(d_max: int) -> str:
    return "|" + "".join(f"{t:03}|" for t in range(d_max))


def format_job(job: Job) -> str:
    length = job.d - job.r
    if length > 1:
        bar = "[---" + "|---" * (length - 2) + "|---]"
    else:
        bar = "[---]"
    return " " * (4 * job.r) + bar + f"p:{job.p}, id:{job.id}"


def format_instance(instance: Instance) -> str:
    lines = [
        f"d_max: {instance.d_max}, m: {instance.m}, "
        f"p_total: {instance.p_total}, q: {instance.q}",
        _slot_header(instance.d_max),
    ]
    lines.extend(format_job(job) for job in instance.jobs)
    return "\n".join(lines)


def format_schedule(schedule: Schedule) -> str:
    """Machine levels stacked bottom-up; the top line is level ``m``."""
    horizon = len(schedule.slots)
    lines = [_slot_header(horizon), "|" + "   |" * horizon]
    depth = max((len(ids) for ids in schedule.slots), default=0)
    for k in range(max(depth, schedule.m)):
        cells = []
        for ids in schedule.slots:
            cells.append(f"{ids[k]:03}|" if k < len(ids) else "---|")
        lines.append("|" + "".join(cells))
    lines.reverse()
    return "\n".join(lines)
