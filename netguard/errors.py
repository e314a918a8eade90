"""Exception taxonomy for netguard.

Load-time text problems derive from :class:`NetworkFormatError`, graph
invariant violations from :class:`GraphError` and query preconditions from
:class:`QueryError`. The CLI maps them to exit codes; nothing else catches
them.
"""

from __future__ import annotations


class NetguardError(Exception):
    """Base class for every error raised by netguard."""


# --- Input text ---


class NetworkFormatError(NetguardError):
    """Malformed network description."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None) -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class HeaderError(NetworkFormatError):
    """First significant line is missing or not a non-negative integer."""


class VertexFormatError(NetworkFormatError):
    """Vertex line is not ``<id> <true|false>``."""


class VertexCountError(NetworkFormatError):
    """Input ended before the declared number of vertex lines."""


class EdgeFormatError(NetworkFormatError):
    """Edge line does not have exactly four tokens."""


class NumberFormatError(NetworkFormatError):
    """Latency or encryption level is not a number."""


# --- Graph invariants ---


class GraphError(NetguardError):
    """Graph model invariant violated."""


class ConflictError(GraphError):
    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Conflicting vulnerability for node: {node_id}")


class UnknownNodeError(GraphError):
    def __init__(self, *node_ids: str) -> None:
        self.node_ids = node_ids
        super().__init__(f"Unknown node: {', '.join(node_ids)}")


class EncryptionRangeError(GraphError):
    def __init__(self, u: str, v: str, level: int) -> None:
        self.level = level
        super().__init__(f"Encryption level out of range (1-3) on edge {u} {v}: {level}")


class LatencyRangeError(GraphError):
    def __init__(self, u: str, v: str, latency: float) -> None:
        self.latency = latency
        super().__init__(f"Latency must be finite and non-negative on edge {u} {v}: {latency}")


# --- Queries ---


class QueryError(NetguardError):
    """Query precondition violated."""


class ValidationError(QueryError):
    """Query arguments are well-formed but not acceptable (e.g. vulnerable server)."""
