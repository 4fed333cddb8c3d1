"""Incremental maximum flow on a mutable capacitated digraph.

The PLTR sweep changes a handful of capacities and asks for the maximum flow
again, thousands of times per instance. ``FlowNetwork`` therefore keeps its
current flow between calls and only augments from there (Edmonds-Karp,
shortest augmenting paths). Lowering a capacity below the flow it carries
first cancels the surplus along a source-to-sink flow path through that edge,
so the stored flow stays valid at all times.

Flow is stored skew-symmetrically: ``flow(u, v) == -flow(v, u)``.
"""

from __future__ import annotations

from collections import deque
from typing import Optional

from pltr.errors import InvariantViolationError


class FlowNetwork:
    def __init__(self, size: int, source: int, sink: int) -> None:
        if not (0 <= source < size and 0 <= sink < size) or source == sink:
            raise ValueError(f"invalid source/sink {source}/{sink} for {size} nodes")
        self.size = size
        self.source = source
        self.sink = sink
        # capacity[u] has a key for every neighbour, reverse pairs included
        self._capacity: list[dict[int, int]] = [{} for _ in range(size)]
        self._flow: list[dict[int, int]] = [{} for _ in range(size)]

    # Structure -----------------------------------------------------------

    def _register(self, u: int, v: int) -> None:
        if v not in self._capacity[u]:
            self._capacity[u][v] = 0
            self._flow[u][v] = 0
        if u not in self._capacity[v]:
            self._capacity[v][u] = 0
            self._flow[v][u] = 0

    def add_edge(self, u: int, v: int, capacity: int) -> None:
        """Register edge ``u -> v``; zero capacity still makes it mutable later."""
        if capacity < 0:
            raise ValueError(f"negative capacity {capacity} on {u}->{v}")
        self._register(u, v)
        self._capacity[u][v] = capacity

    # Queries -------------------------------------------------------------

    def flow(self, u: int, v: int) -> int:
        return self._flow[u].get(v, 0)

    def residual_capacity(self, u: int, v: int) -> int:
        return self._capacity[u].get(v, 0) - self._flow[u].get(v, 0)

    def capacity(self, u: int, v: int) -> int:
        """Total capacity of ``u -> v``: current flow plus residual."""
        return self.flow(u, v) + self.residual_capacity(u, v)

    @property
    def value(self) -> int:
        """Flow currently leaving the source."""
        return sum(self._flow[self.source].values())

    # Mutation ------------------------------------------------------------

    def set_capacity(self, u: int, v: int, capacity: int) -> None:
        """Replace the capacity of ``u -> v`` without re-maximising.

        Flow above the new capacity is cancelled along one or more
        source-to-sink paths through the edge, which lowers ``value``.
        """
        if capacity < 0:
            raise ValueError(f"negative capacity {capacity} on {u}->{v}")
        self._register(u, v)
        surplus = self._flow[u][v] - capacity
        if surplus > 0:
            self._cancel_flow(u, v, surplus)
        self._capacity[u][v] = capacity

    def maximize_flow(self) -> int:
        """Augment the current flow to a maximum one and return its value."""
        while True:
            parent = self._augmenting_path()
            if parent is None:
                return self.value
            bottleneck = None
            node = self.sink
            while node != self.source:
                prev = parent[node]
                residual = self.residual_capacity(prev, node)
                bottleneck = residual if bottleneck is None else min(bottleneck, residual)
                node = prev
            node = self.sink
            while node != self.source:
                prev = parent[node]
                self._push(prev, node, bottleneck)
                node = prev

    def snapshot(self) -> FlowNetwork:
        """Independent copy of capacities and flow."""
        clone = FlowNetwork.__new__(FlowNetwork)
        clone.size = self.size
        clone.source = self.source
        clone.sink = self.sink
        clone._capacity = [dict(row) for row in self._capacity]
        clone._flow = [dict(row) for row in self._flow]
        return clone

    # Internals -----------------------------------------------------------

    def _push(self, u: int, v: int, amount: int) -> None:
        self._flow[u][v] += amount
        self._flow[v][u] -= amount

    def _augmenting_path(self) -> Optional[list[int]]:
        """BFS in the residual graph; returns the parent array or None."""
        parent = [-1] * self.size
        parent[self.source] = self.source
        queue: deque[int] = deque([self.source])
        while queue:
            node = queue.popleft()
            flows = self._flow[node]
            for nxt, cap in self._capacity[node].items():
                if parent[nxt] < 0 and cap - flows[nxt] > 0:
                    parent[nxt] = node
                    if nxt == self.sink:
                        return parent
                    queue.append(nxt)
        return None

    def _flow_path(self, start: int, goal: int, forward: bool) -> Optional[list[int]]:
        """Path from ``start`` to ``goal`` using only edges that carry flow.

        With ``forward`` the edges are followed in flow direction, otherwise
        against it (used to walk from a node back to the source).
        """
        parent: dict[int, int] = {start: start}
        queue: deque[int] = deque([start])
        while queue and goal not in parent:
            node = queue.popleft()
            for nxt, f in self._flow[node].items():
                carrying = f > 0 if forward else f < 0
                if carrying and nxt not in parent:
                    parent[nxt] = node
                    queue.append(nxt)
        if goal not in parent:
            return None
        path = [goal]
        while path[-1] != start:
            path.append(parent[path[-1]])
        path.reverse()
        return path

    def _cancel_flow(self, u: int, v: int, amount: int) -> None:
        while amount > 0:
            head = self._flow_path(u, self.source, forward=False)
            tail = self._flow_path(v, self.sink, forward=True)
            if head is None or tail is None:
                raise InvariantViolationError(
                    f"flow on {u}->{v} is not part of a source-sink path"
                )
            # head runs u .. source against the flow, tail runs v .. sink with it
            edges = [(head[i + 1], head[i]) for i in range(len(head) - 1)]
            edges.append((u, v))
            edges.extend((tail[i], tail[i + 1]) for i in range(len(tail) - 1))
            step = min([amount] + [self._flow[a][b] for a, b in edges])
            for a, b in edges:
                self._push(a, b, -step)
            amount -= step
