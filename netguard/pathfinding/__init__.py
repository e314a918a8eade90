from netguard.pathfinding.dijkstra import dijkstra, format_distance, patch_radius
from netguard.pathfinding.infection import infect_min_hops, infect_path

__all__ = ["dijkstra", "format_distance", "infect_min_hops", "infect_path", "patch_radius"]
