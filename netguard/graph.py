from __future__ import annotations

import math
from dataclasses import dataclass

import networkx as nx

from netguard.errors import ConflictError, EncryptionRangeError, LatencyRangeError, UnknownNodeError

MIN_ENCRYPTION = 1
MAX_ENCRYPTION = 3


@dataclass(frozen=True)
class Edge:
    """One directed arc: neighbor node, raw latency, encryption level."""

    target: str
    latency: float
    encryption_level: int

    def effective_cost(self) -> float:
        # level 3 -> x1.0, level 2 -> x1.1, level 1 -> x1.2
        return self.latency * (1.0 + (MAX_ENCRYPTION - self.encryption_level) / 10.0)


class Graph:
    """
    Adjacency-list network:
    - adj[node] is the ordered list of outgoing edges
    - vulnerable[node] is the node's vulnerability flag
    """

    def __init__(self, allow_negative_latency=False):
        self.adj: dict[str, list[Edge]] = {}
        self.vulnerable: dict[str, bool] = {}
        self.allow_negative_latency = allow_negative_latency

    def add_node(self, node_id: str, is_vulnerable: bool) -> None:
        if node_id in self.adj:
            # same id declared again with the other flag
            if self.vulnerable[node_id] != is_vulnerable:
                raise ConflictError(node_id)
            return
        self.adj[node_id] = []
        self.vulnerable[node_id] = is_vulnerable

    def has_node(self, node_id: str) -> bool:
        return node_id in self.adj

    def add_edge(self, u: str, v: str, latency: float, encryption_level: int, directed: bool) -> None:
        missing = [n for n in (u, v) if not self.has_node(n)]
        if missing:
            raise UnknownNodeError(*missing)
        if encryption_level < MIN_ENCRYPTION or encryption_level > MAX_ENCRYPTION:
            raise EncryptionRangeError(u, v, encryption_level)
        if not self.allow_negative_latency and not (math.isfinite(latency) and latency >= 0):
            raise LatencyRangeError(u, v, latency)

        self.adj[u].append(Edge(v, latency, encryption_level))
        if not directed:
            self.adj[v].append(Edge(u, latency, encryption_level))

    def is_vulnerable(self, node_id: str) -> bool:
        if node_id not in self.vulnerable:
            raise UnknownNodeError(node_id)
        return self.vulnerable[node_id]

    def edges(self, node_id: str) -> list[Edge]:
        if node_id not in self.adj:
            raise UnknownNodeError(node_id)
        return self.adj[node_id]

    def nodes(self) -> list[str]:
        return list(self.adj)

    def vulnerable_nodes(self) -> list[str]:
        return [n for n, flag in self.vulnerable.items() if flag]

    def edge_count(self) -> int:
        return sum(len(out) for out in self.adj.values())

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Export to a networkx MultiDiGraph.
        Edge attribute 'weight' holds the effective cost.
        """
        G = nx.MultiDiGraph()
        for node, flag in self.vulnerable.items():
            G.add_node(node, vulnerable=flag)
        for u, out in self.adj.items():
            for e in out:
                G.add_edge(
                    u, e.target,
                    latency=e.latency,
                    encryption_level=e.encryption_level,
                    weight=e.effective_cost(),
                )
        return G

    def __contains__(self, node_id) -> bool:
        return node_id in self.adj

    def __iter__(self):
        return iter(self.adj)

    def __len__(self) -> int:
        return len(self.adj)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self)}, edges={self.edge_count()})"
