import logging
import random
import re
from collections import Counter

import networkx as nx

from netguard.errors import (
    EdgeFormatError,
    HeaderError,
    NumberFormatError,
    VertexCountError,
    VertexFormatError,
)
from netguard.graph import MAX_ENCRYPTION, MIN_ENCRYPTION, Graph

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _significant_lines(lines):
    # (line number, stripped text), skipping blanks and '#' comments
    for number, raw in enumerate(lines, 1):
        text = raw.strip()
        if not text or text.startswith("#"):
            continue
        yield number, text


def _parse_int(token):
    if not _INTEGER.fullmatch(token):
        raise ValueError(token)
    return int(token)


def _parse_float(token):
    # plain ASCII decimals only: no underscores, no inf/nan words
    if not _DECIMAL.fullmatch(token):
        raise ValueError(token)
    return float(token)


def build_network(lines, directed=False, allow_negative_latency=False):
    """
    Build a validated Graph from the text format:
        <N>
        <id> <true|false>          (N lines)
        <u> <v> <latency> <enc>    (remaining lines)
    Raises on the first problem; no partial graph is returned.
    """
    g = Graph(allow_negative_latency=allow_negative_latency)
    stream = _significant_lines(lines)

    # 1. header: number of vertices
    header = next(stream, None)
    if header is None:
        raise HeaderError("Missing number-of-nodes header")
    number, text = header
    try:
        n = _parse_int(text)
    except ValueError:
        raise HeaderError("First line must be a non-negative integer", number, text) from None
    if n < 0:
        raise HeaderError("First line must be a non-negative integer", number, text)

    # 2. vertex list
    read = 0
    while read < n:
        item = next(stream, None)
        if item is None:
            raise VertexCountError(f"Expected {n} vertex lines, found {read}")
        number, text = item
        parts = text.split()
        if len(parts) != 2:
            raise VertexFormatError(f"Bad vertex line: {text}", number, text)
        flag = parts[1].lower()
        if flag not in ("true", "false"):
            raise VertexFormatError(f"Vulnerability must be true/false: {parts[1]}", number, text)
        g.add_node(parts[0], flag == "true")
        read += 1

    # 3. remaining lines are edges
    for number, text in stream:
        parts = text.split()
        if len(parts) != 4:
            raise EdgeFormatError(f"Bad edge line: {text}", number, text)
        u, v, latency_token, enc_token = parts
        try:
            latency = _parse_float(latency_token)
        except ValueError:
            raise NumberFormatError(f"Latency is not a number: {latency_token}", number, text) from None
        try:
            enc = _parse_int(enc_token)
        except ValueError:
            raise NumberFormatError(f"Encryption level is not an integer: {enc_token}", number, text) from None
        g.add_edge(u, v, latency, enc, directed)

    logger.debug(
        "Loaded network: %d nodes, %d edges (directed=%s)", len(g), g.edge_count(), directed
    )
    return g


def load_network(path, directed=False, allow_negative_latency=False):
    with open(path, "r", encoding="utf-8") as f:
        return build_network(f, directed=directed, allow_negative_latency=allow_negative_latency)


def build_random_network(n_nodes=15, edge_prob=0.4, vulnerable_ratio=0.5, latency_range=(1.0, 20.0),
                         seed=None, directed=False):
    """
    Random connected network:
    - Erdos-Renyi skeleton, re-drawn until connected.
    - A vulnerable_ratio share of nodes is vulnerable; at least one node stays safe
      so a patch server always exists.
    - Nodes are renamed s1.. (safe) and v1.. (vulnerable).
    - Directed networks get both directions of every skeleton edge, each with its own
      latency and encryption level.
    """
    if n_nodes < 1:
        raise ValueError("n_nodes must be at least 1")
    if not 0.0 <= vulnerable_ratio <= 1.0:
        raise ValueError("vulnerable_ratio must be between 0 and 1")

    rng = random.Random(seed)

    skeleton = nx.erdos_renyi_graph(n=n_nodes, p=edge_prob, seed=rng.randint(0, 2**31))
    while not nx.is_connected(skeleton):
        skeleton = nx.erdos_renyi_graph(n=n_nodes, p=edge_prob, seed=rng.randint(0, 2**31))

    n_vulnerable = min(round(n_nodes * vulnerable_ratio), n_nodes - 1)
    order = list(skeleton.nodes())
    rng.shuffle(order)
    vulnerable = set(order[:n_vulnerable])

    # rename 0.. -> s1 / v1 ...
    mapping = {}
    counters = {True: 0, False: 0}
    for n in skeleton.nodes():
        flag = n in vulnerable
        counters[flag] += 1
        mapping[n] = f"{'v' if flag else 's'}{counters[flag]}"

    g = Graph()
    for n in skeleton.nodes():
        g.add_node(mapping[n], n in vulnerable)

    def random_link():
        return round(rng.uniform(*latency_range), 1), rng.randint(MIN_ENCRYPTION, MAX_ENCRYPTION)

    for u, v in skeleton.edges():
        latency, enc = random_link()
        g.add_edge(mapping[u], mapping[v], latency, enc, directed)
        if directed:
            latency, enc = random_link()
            g.add_edge(mapping[v], mapping[u], latency, enc, directed)

    logger.debug("Generated random network: %r (seed=%s)", g, seed)
    return g


def dump_network(g, directed=False):
    """
    Serialize a Graph back into the text format.
    For undirected networks each mirrored pair is written once.
    """
    lines = ["# generated by netguard", str(len(g))]
    for node in g:
        lines.append(f"{node} {'true' if g.vulnerable[node] else 'false'}")

    pending = Counter()
    for u in g:
        for e in g.adj[u]:
            key = (u, e.target, e.latency, e.encryption_level)
            if not directed and pending[key] > 0:
                pending[key] -= 1
                continue
            lines.append(f"{u} {e.target} {e.latency!r} {e.encryption_level}")
            if not directed:
                pending[(e.target, u, e.latency, e.encryption_level)] += 1
    return "\n".join(lines) + "\n"
