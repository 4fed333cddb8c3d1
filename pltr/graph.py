"""Construction of the PLTR flow network from an instance.

Node layout (n jobs, horizon d_max):
    alpha = 0, u_j = 1 + j, v_t = 1 + n + t, gamma = 1 + n + d_max, omega = gamma + 1

alpha -> u_j carries the processing volume of job j, u_j -> v_t has capacity
1 inside the job's window. Every slot node splits its processor budget between
v_t -> omega (processors already committed busy) and v_t -> gamma (processors
still undecided); gamma -> omega bounds how much volume may use the undecided
budget overall.
"""

from __future__ import annotations

from dataclasses import dataclass

from pltr.errors import InfeasibleInstanceError
from pltr.flow_network import FlowNetwork
from pltr.models import Instance


@dataclass(frozen=True)
class NodeIndex:
    n: int
    d_max: int

    @classmethod
    def for_instance(cls, instance: Instance) -> NodeIndex:
        return cls(n=instance.n, d_max=instance.d_max)

    @property
    def alpha(self) -> int:
        return 0

    def u(self, job: int) -> int:
        return 1 + job

    def v(self, tslot: int) -> int:
        return 1 + self.n + tslot

    @property
    def gamma(self) -> int:
        return 1 + self.n + self.d_max

    @property
    def omega(self) -> int:
        return self.gamma + 1

    @property
    def size(self) -> int:
        return self.omega + 1


def slot_lower_bound(instance: Instance, enforce_lower_bound: bool = False) -> int:
    """Busy processors every slot starts with (``q`` only when enforced)."""
    if not enforce_lower_bound:
        return 0
    if instance.q > instance.m:
        raise ValueError(f"lower bound q={instance.q} exceeds m={instance.m}")
    return instance.q


def create_graph(instance: Instance, enforce_lower_bound: bool = False) -> FlowNetwork:
    """Build the flow network for ``instance``; no flow is computed yet.

    Raises:
        ValueError: If the lower bound is enforced and ``q > m``.
        InfeasibleInstanceError: If the enforced lower bound alone asks for
            more busy slots than there is processing volume.
    """
    nodes = NodeIndex.for_instance(instance)
    nw = FlowNetwork(nodes.size, nodes.alpha, nodes.omega)
    lower = slot_lower_bound(instance, enforce_lower_bound)

    for j, job in enumerate(instance.jobs):
        nw.add_edge(nodes.alpha, nodes.u(j), job.p)
        for t in job.window:
            nw.add_edge(nodes.u(j), nodes.v(t), 1)

    for t in range(instance.d_max):
        nw.add_edge(nodes.v(t), nodes.gamma, instance.m - lower)
        nw.add_edge(nodes.v(t), nodes.omega, lower)

    gamma_budget = instance.p_total - lower * instance.d_max
    if gamma_budget < 0:
        raise InfeasibleInstanceError(
            f"lower bound q={lower} needs {lower * instance.d_max} busy slots "
            f"but only {instance.p_total} units of work exist"
        )
    nw.add_edge(nodes.gamma, nodes.omega, gamma_budget)
    return nw


def is_schedulable(instance: Instance, enforce_lower_bound: bool = False) -> bool:
    """True if some schedule on ``m`` machines meets every window."""
    try:
        nw = create_graph(instance, enforce_lower_bound)
    except InfeasibleInstanceError:
        return False
    return nw.maximize_flow() == instance.p_total
