import heapq
import math
from decimal import ROUND_HALF_UP, Context, Decimal

from netguard.errors import UnknownNodeError, ValidationError

RELAX_EPSILON = 1e-9
INF_TEXT = "INF"


def dijkstra(graph, src, epsilon=RELAX_EPSILON):
    """
    Single-source shortest paths over effective edge costs.
    Returns (dist, parent); unreachable nodes keep dist = inf.
    """
    if src not in graph:
        raise UnknownNodeError(src)

    dist = {node: math.inf for node in graph} # initial value is INF for every node in graph
    dist[src] = 0.0
    parent = {src: None}

    # initialize min heap
    pq = [(0.0, src)] # (distance, node)

    while pq:
        current_dist, node = heapq.heappop(pq)

        # skip outdated elements
        if current_dist > dist[node]:
            continue

        for edge in graph.edges(node):
            cost = edge.effective_cost()
            if not cost >= 0:
                # only reachable when the graph was loaded with allow_negative_latency
                raise ValidationError(f"Negative or NaN edge cost {node} -> {edge.target}: {cost}")
            new_dist = current_dist + cost
            # only a real improvement counts, rounding noise would re-expand forever
            if new_dist + epsilon < dist[edge.target]:
                dist[edge.target] = new_dist
                parent[edge.target] = node
                heapq.heappush(pq, (new_dist, edge.target))

    return dist, parent


def reconstruct_path(parent, dst):
    if dst not in parent:
        return None
    path = []
    node = dst
    while node is not None:
        path.append(node)
        node = parent[node]
    path.reverse()
    return path


def check_patch_server(graph, server):
    if server not in graph:
        raise UnknownNodeError(server)
    # a patch server cannot itself be compromised
    if graph.is_vulnerable(server):
        raise ValidationError(f"Server must not be vulnerable: {server}")


def format_distance(value):
    """One decimal digit, half-up on the shortest repr (0.25 -> '0.3'); inf -> 'INF'."""
    if math.isinf(value):
        return INF_TEXT
    # enough precision for any finite double written out in full
    exact = Context(prec=400)
    return str(Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP, context=exact))


def patch_radius(graph, server, epsilon=RELAX_EPSILON):
    """
    Maximum shortest-path distance from a non-vulnerable server to any vulnerable node.
    'INF' as soon as one vulnerable node is unreachable; '0.0' when nothing is vulnerable.
    """
    check_patch_server(graph, server)
    dist, _ = dijkstra(graph, server, epsilon=epsilon)
    return radius_from_distances(graph, dist)


def radius_from_distances(graph, dist):
    """Reduce a settled distance map to the patch radius text."""
    radius = 0.0
    for node in graph.vulnerable_nodes():
        d = dist[node]
        if math.isinf(d):
            return INF_TEXT
        radius = max(radius, d)
    return format_distance(radius)
