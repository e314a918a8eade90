import math

import numpy as np
import pandas as pd

from netguard.pathfinding.dijkstra import (
    RELAX_EPSILON,
    check_patch_server,
    dijkstra,
    radius_from_distances,
    reconstruct_path,
)

COLUMNS = ["node", "distance", "hops", "route"]


def _table(graph, dist, parent):
    rows = []
    for node in graph.vulnerable_nodes():
        d = dist[node]
        if math.isinf(d):
            rows.append({"node": node, "distance": np.inf, "hops": np.nan, "route": ""})
            continue
        path = reconstruct_path(parent, node)
        rows.append({
            "node": node,
            "distance": d,
            "hops": len(path) - 1,
            "route": " -> ".join(path),
        })

    df = pd.DataFrame(rows, columns=COLUMNS)
    if df.empty:
        return df
    df = df.sort_values(["distance", "node"], ascending=[False, True], kind="mergesort")
    return df.reset_index(drop=True)


def distance_table(graph, server, epsilon=RELAX_EPSILON):
    """
    Per-vulnerable-node view of a patch run from `server`.
    Rows sorted by distance (farthest first, unreachable on top), then node id.
    """
    return patch_report(graph, server, epsilon=epsilon)[1]


def patch_report(graph, server, epsilon=RELAX_EPSILON):
    """Patch radius text and distance table from a single Dijkstra run."""
    check_patch_server(graph, server)
    dist, parent = dijkstra(graph, server, epsilon=epsilon)
    return radius_from_distances(graph, dist), _table(graph, dist, parent)
