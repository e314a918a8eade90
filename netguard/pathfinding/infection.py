from collections import deque

from netguard.errors import UnknownNodeError


def infect_path(graph, src, dst):
    """
    Shortest route src -> dst in which every node is vulnerable (BFS, hop count only).
    Returns the node list, or None when no such route exists.
    """
    missing = [n for n in (src, dst) if n not in graph]
    if missing:
        raise UnknownNodeError(*missing)

    # a non-vulnerable end point can never be part of an infection route
    if not graph.is_vulnerable(src) or not graph.is_vulnerable(dst):
        return None
    if src == dst:
        return [src]

    parent = {src: None}
    queue = deque([src])

    while queue:
        node = queue.popleft()
        for edge in graph.edges(node):
            nxt = edge.target
            if not graph.vulnerable[nxt] or nxt in parent:
                continue
            parent[nxt] = node
            if nxt == dst:
                path = [dst]
                while parent[path[-1]] is not None:
                    path.append(parent[path[-1]])
                path.reverse()
                return path
            queue.append(nxt)

    return None # unreachable


def infect_min_hops(graph, src, dst):
    """Minimum hops from src to dst through vulnerable nodes only, -1 if impossible."""
    path = infect_path(graph, src, dst)
    if path is None:
        return -1
    return len(path) - 1
