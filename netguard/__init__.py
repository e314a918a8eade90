"""netguard: infection hop counts and patch radius over vulnerable networks."""

from netguard.graph import Edge, Graph
from netguard.network_builder import build_network, load_network
from netguard.pathfinding import infect_min_hops, patch_radius

__version__ = "0.1.0"

__all__ = [
    "Edge",
    "Graph",
    "__version__",
    "build_network",
    "infect_min_hops",
    "load_network",
    "patch_radius",
]
