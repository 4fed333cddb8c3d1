"""Parallel Left-to-Right (PLTR) scheduling.

Processor levels are decided from ``m`` down to ``1``. For each level the time
horizon is swept left to right, alternately keeping the processor idle and
keeping it busy for the longest stretch that still admits a saturating flow.
The stretch ends are found by binary search over trial copies of the network;
only the chosen stretch is applied to the committed network.
"""

from __future__ import annotations

import logging
from typing import Callable

from pltr.decoder import build_schedule_from_flow
from pltr.errors import (
    InfeasibleInstanceError,
    InvariantViolationError,
    MaxFlowExceedsBoundError,
)
from pltr.flow_network import FlowNetwork
from pltr.graph import NodeIndex, create_graph
from pltr.models import Instance, Schedule
from pltr.search import binary_search_maximum

logger = logging.getLogger("pltr.algorithm")

Extension = Callable[[int, int, int, FlowNetwork, Instance], bool]


def pltr(
    instance: Instance,
    enforce_lower_bound: bool = False,
    validate: bool = True,
) -> Schedule:
    """Compute a feasible schedule for ``instance``.

    Args:
        instance: Jobs and machine count.
        enforce_lower_bound: Keep at least ``instance.q`` machines busy in
            every slot. Off by default, in which case ``q`` is ignored.
        validate: Check the extracted schedule before returning it. Turning
            this off is meant for timing runs only; the unchecked schedule is
            returned as read off the flow.

    Returns:
        Schedule meeting every job's window and volume on ``m`` machines.

    Raises:
        InfeasibleInstanceError: If no such schedule exists.
        InvariantViolationError: On an internal inconsistency of the sweep.
    """
    nw = create_graph(instance, enforce_lower_bound)
    if not _is_saturated(nw, instance):
        raise InfeasibleInstanceError(
            f"instance with {instance.n} jobs is not schedulable on {instance.m} machines"
        )
    for k in range(instance.m, 0, -1):
        t = 0
        while t < instance.d_max:
            upto = keep_idle(k, t, nw, instance)
            if upto < instance.d_max:
                upto = keep_busy(k, upto, nw, instance)
            if upto == t:
                raise InvariantViolationError(f"level {k}: sweep stuck at slot {t}")
            t = upto
    logger.info(
        "Finished instance: n=%d m=%d d_max=%d p_total=%d",
        instance.n,
        instance.m,
        instance.d_max,
        instance.p_total,
    )
    return build_schedule_from_flow(nw, instance, validate=validate)


def _is_saturated(nw: FlowNetwork, instance: Instance) -> bool:
    max_flow = nw.maximize_flow()
    if max_flow > instance.p_total:
        raise MaxFlowExceedsBoundError(
            f"max flow {max_flow} exceeds total processing volume {instance.p_total}"
        )
    return max_flow == instance.p_total


def keep_idle_from_to(
    k: int, start: int, stop: int, nw: FlowNetwork, instance: Instance
) -> bool:
    """Mark processor ``k`` idle on ``[start, stop)`` and test feasibility.

    Mutates ``nw``; callers probing a hypothetical range pass a snapshot.
    """
    nodes = NodeIndex.for_instance(instance)
    for t in range(start, stop):
        v_t = nodes.v(t)
        l_t = nw.capacity(v_t, nodes.omega)
        if l_t >= k:
            return False
        m_t = nw.capacity(v_t, nodes.gamma) + l_t
        if m_t != k:
            raise InvariantViolationError(
                f"level {k}, slot {t}: budget {m_t} (busy {l_t}) instead of {k}"
            )
        nw.set_capacity(v_t, nodes.gamma, (k - 1) - l_t)
    return _is_saturated(nw, instance)


def keep_busy_from_to(
    k: int, start: int, stop: int, nw: FlowNetwork, instance: Instance
) -> bool:
    """Mark processor ``k`` busy on ``[start, stop)`` and test feasibility.

    Mutates ``nw``; callers probing a hypothetical range pass a snapshot.
    """
    nodes = NodeIndex.for_instance(instance)
    total_increase = 0
    for t in range(start, stop):
        v_t = nodes.v(t)
        old_l_t = nw.capacity(v_t, nodes.omega)
        new_l_t = max(k, old_l_t)
        increase = new_l_t - old_l_t
        new_gamma_cap = nw.capacity(v_t, nodes.gamma) - increase
        if new_gamma_cap < 0:
            return False
        nw.set_capacity(v_t, nodes.omega, new_l_t)
        nw.set_capacity(v_t, nodes.gamma, new_gamma_cap)
        total_increase += increase
    new_cap_gamma_omega = nw.capacity(nodes.gamma, nodes.omega) - total_increase
    if new_cap_gamma_omega < 0:
        return False
    nw.set_capacity(nodes.gamma, nodes.omega, new_cap_gamma_omega)
    return _is_saturated(nw, instance)


def _extend(
    name: str,
    extension: Extension,
    k: int,
    start: int,
    nw: FlowNetwork,
    instance: Instance,
) -> int:
    def can_extend(stop: int) -> bool:
        return extension(k, start, stop, nw.snapshot(), instance)

    upto = binary_search_maximum(can_extend, start, instance.d_max + 1)
    if upto is None:
        raise InvariantViolationError(
            f"level {k}: network stopped being saturated before {name} from slot {start}"
        )
    if not extension(k, start, upto, nw, instance):
        raise InvariantViolationError(
            f"level {k}: committing {name} on [{start}, {upto}) lost saturation"
        )
    logger.debug("kept %s processor %d from %d upto %d", name, k, start, upto)
    return upto


def keep_idle(k: int, start: int, nw: FlowNetwork, instance: Instance) -> int:
    """Keep processor ``k`` idle from ``start`` as long as possible.

    Returns:
        End (exclusive) of the committed idle stretch; equals ``start`` when
        the processor is needed right away.
    """
    return _extend("idle", keep_idle_from_to, k, start, nw, instance)


def keep_busy(k: int, start: int, nw: FlowNetwork, instance: Instance) -> int:
    """Keep processor ``k`` busy from ``start`` as long as possible.

    Returns:
        End (exclusive) of the committed busy stretch.
    """
    return _extend("busy", keep_busy_from_to, k, start, nw, instance)
