from __future__ import annotations

from pltr.flow_network import FlowNetwork
from pltr.graph import NodeIndex
from pltr.models import Instance, Schedule


def build_schedule_from_flow(
    nw: FlowNetwork,
    instance: Instance,
    validate: bool = True,
) -> Schedule:
    """Read a schedule off the final flow of the PLTR network.

    Job ``j`` is placed in slot ``t`` iff the edge ``u_j -> v_t`` carries one
    unit of flow, whether or not ``t`` lies in the job's window. Within a
    slot, ids follow the order of ``instance.jobs``.

    Args:
        nw: Network after the sweep (saturating flow).
        instance: Instance the network was built from.
        validate: When True run ``Schedule.validate`` before returning.

    Returns:
        Schedule with ``instance.d_max`` slots.

    Raises:
        ScheduleValidationError: If validation is requested and fails.
    """
    nodes = NodeIndex.for_instance(instance)
    slots: list[list[int]] = [[] for _ in range(instance.d_max)]
    for t in range(instance.d_max):
        v_t = nodes.v(t)
        for j, job in enumerate(instance.jobs):
            if nw.flow(nodes.u(j), v_t) == 1:
                slots[t].append(job.id)
    schedule = Schedule.from_lists(slots, instance.m)
    if validate:
        schedule.validate(instance)
    return schedule
