import pytest

from pltr.errors import InfeasibleInstanceError
from pltr.flow_network import FlowNetwork
from pltr.graph import NodeIndex, create_graph, is_schedulable
from pltr.models import Instance, Job

S, A, B, T = 0, 1, 2, 3


def diamond() -> FlowNetwork:
    """s->a 3, s->b 1, a->t 2, b->t 5, a->b 2 (maximum flow 4)."""
    nw = FlowNetwork(4, S, T)
    nw.add_edge(S, A, 3)
    nw.add_edge(S, B, 1)
    nw.add_edge(A, T, 2)
    nw.add_edge(B, T, 5)
    nw.add_edge(A, B, 2)
    return nw


def assert_conserved(nw: FlowNetwork) -> None:
    for node in range(nw.size):
        if node in (nw.source, nw.sink):
            continue
        net = sum(nw.flow(node, other) for other in range(nw.size))
        assert net == 0, f"node {node} leaks {net}"


def test_maximize_flow_from_scratch() -> None:
    nw = diamond()
    assert nw.value == 0
    assert nw.maximize_flow() == 4
    assert_conserved(nw)
    for u, v in [(S, A), (S, B), (A, T), (B, T), (A, B)]:
        assert 0 <= nw.flow(u, v) <= nw.capacity(u, v)


def test_capacity_is_flow_plus_residual() -> None:
    nw = diamond()
    nw.maximize_flow()
    for u, v in [(S, A), (S, B), (A, T), (B, T), (A, B)]:
        assert nw.capacity(u, v) == nw.flow(u, v) + nw.residual_capacity(u, v)
    assert nw.capacity(S, A) == 3
    assert nw.capacity(T, S) == 0


def test_lowering_capacity_cancels_flow_then_reaugments() -> None:
    nw = diamond()
    nw.maximize_flow()
    nw.set_capacity(A, T, 0)
    assert nw.flow(A, T) == 0
    assert nw.capacity(A, T) == 0
    assert nw.value == 2
    assert_conserved(nw)
    # remaining route for a: a->b->t
    assert nw.maximize_flow() == 3
    assert_conserved(nw)


def test_raising_capacity_keeps_existing_flow() -> None:
    nw = diamond()
    nw.maximize_flow()
    nw.set_capacity(S, B, 4)
    assert nw.value == 4
    assert nw.maximize_flow() == 7


def test_set_capacity_on_new_pair() -> None:
    nw = diamond()
    nw.maximize_flow()
    nw.set_capacity(S, T, 2)
    assert nw.maximize_flow() == 6


def test_negative_capacity_rejected() -> None:
    nw = diamond()
    with pytest.raises(ValueError):
        nw.set_capacity(A, T, -1)
    with pytest.raises(ValueError):
        nw.add_edge(B, A, -3)


def test_invalid_terminals_rejected() -> None:
    with pytest.raises(ValueError):
        FlowNetwork(2, 0, 0)
    with pytest.raises(ValueError):
        FlowNetwork(2, 0, 2)


def test_snapshot_is_independent() -> None:
    nw = diamond()
    nw.maximize_flow()
    snap = nw.snapshot()
    snap.set_capacity(S, A, 0)
    snap.maximize_flow()
    assert snap.value == 1
    assert nw.capacity(S, A) == 3
    assert nw.value == 4
    assert_conserved(nw)
    assert_conserved(snap)


# Network layout ---------------------------------------------------------


def test_node_layout() -> None:
    jobs = (Job(id=7, r=0, d=2, p=1), Job(id=8, r=1, d=3, p=2))
    nodes = NodeIndex.for_instance(Instance(jobs=jobs, m=2))
    assert nodes.alpha == 0
    assert [nodes.u(j) for j in range(2)] == [1, 2]
    assert [nodes.v(t) for t in range(3)] == [3, 4, 5]
    assert nodes.gamma == 6
    assert nodes.omega == 7
    assert nodes.size == 8


def test_create_graph_capacities() -> None:
    jobs = (Job(id=7, r=0, d=2, p=1), Job(id=8, r=1, d=3, p=2))
    instance = Instance(jobs=jobs, m=2, q=1)
    nw = create_graph(instance)
    nodes = NodeIndex.for_instance(instance)
    assert nw.value == 0
    assert nw.capacity(nodes.alpha, nodes.u(0)) == 1
    assert nw.capacity(nodes.alpha, nodes.u(1)) == 2
    assert [nw.capacity(nodes.u(0), nodes.v(t)) for t in range(3)] == [1, 1, 0]
    assert [nw.capacity(nodes.u(1), nodes.v(t)) for t in range(3)] == [0, 1, 1]
    for t in range(3):
        assert nw.capacity(nodes.v(t), nodes.gamma) == 2
        assert nw.capacity(nodes.v(t), nodes.omega) == 0
    assert nw.capacity(nodes.gamma, nodes.omega) == 3


def test_create_graph_with_lower_bound() -> None:
    jobs = (Job(id=0, r=0, d=2, p=2), Job(id=1, r=0, d=3, p=2))
    instance = Instance(jobs=jobs, m=3, q=1)
    nw = create_graph(instance, enforce_lower_bound=True)
    nodes = NodeIndex.for_instance(instance)
    for t in range(3):
        assert nw.capacity(nodes.v(t), nodes.gamma) == 2
        assert nw.capacity(nodes.v(t), nodes.omega) == 1
    assert nw.capacity(nodes.gamma, nodes.omega) == 4 - 3
    assert is_schedulable(instance, enforce_lower_bound=True)


def test_create_graph_lower_bound_exceeding_work() -> None:
    instance = Instance(jobs=(Job(id=0, r=0, d=4, p=1),), m=2, q=1)
    with pytest.raises(InfeasibleInstanceError):
        create_graph(instance, enforce_lower_bound=True)
    assert is_schedulable(instance)
