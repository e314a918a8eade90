import logging
import os

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import networkx as nx
from matplotlib.patches import Patch

logger = logging.getLogger(__name__)

NODE_COLORS = {
    True: "#FF6F61",   # vulnerable
    False: "#A0CBE2",  # safe
}


def _drawing_graph(graph):
    # collapse parallel edges, keep the cheapest one for the label
    multi = graph.to_networkx()
    G = nx.DiGraph()
    for node, data in multi.nodes(data=True):
        G.add_node(node, **data)
    for u, v, data in multi.edges(data=True):
        if G.has_edge(u, v) and G[u][v]["weight"] <= data["weight"]:
            continue
        G.add_edge(u, v, **data)
    return G


def draw_network(graph, path=None, output_link="plots/network.png", layout="spring"):
    G = _drawing_graph(graph)

    if layout == "kamada":
        pos = nx.kamada_kawai_layout(G)
    elif layout == "shell":
        pos = nx.shell_layout(G)
    elif layout == "spectral":
        pos = nx.spectral_layout(G)
    else:
        pos = nx.spring_layout(G, seed=42, k=2.0)

    plt.figure(figsize=(10, 8))

    node_colors = [NODE_COLORS[G.nodes[n].get("vulnerable", False)] for n in G.nodes()]
    nx.draw_networkx_nodes(G, pos, node_color=node_colors, node_size=500)
    nx.draw_networkx_labels(G, pos, font_size=9)
    nx.draw_networkx_edges(G, pos, arrows=True, arrowstyle="->", width=1.0, arrowsize=12)
    edge_labels = {
        (u, v): f"{d['latency']:g}/e{d['encryption_level']}"
        for u, v, d in G.edges(data=True)
    }
    nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, font_size=8)

    # highlighted route
    if path and len(path) > 1:
        path_edges = [e for e in zip(path, path[1:]) if G.has_edge(*e)]
        nx.draw_networkx_edges(
            G, pos, edgelist=path_edges,
            width=3.0, edge_color="red",
            arrows=True, arrowstyle="->", arrowsize=16,
        )

    legend_elements = [
        Patch(facecolor=NODE_COLORS[True], label="Vulnerable"),
        Patch(facecolor=NODE_COLORS[False], label="Safe"),
    ]
    plt.legend(handles=legend_elements, loc="upper left", frameon=True)

    plt.title("Network Graph" if not path else "Network Graph with Infection Route", fontsize=12)
    plt.tight_layout()
    directory = os.path.dirname(output_link)
    if directory:
        os.makedirs(directory, exist_ok=True)
    plt.savefig(output_link)
    plt.close()
    logger.info("Saved drawing to %s", output_link)
    return output_link
