# src/netseg/graph.py
from __future__ import annotations
from typing import Any, Hashable, List, Sequence, Union

import numpy as np
import networkx as nx

from netseg.errors import GraphError

Attr = Union[str, Sequence[Any], np.ndarray]


def node_order(G: nx.Graph) -> List[Hashable]:
    """Nodes in iteration order; attribute vectors are aligned to this."""
    return list(G.nodes())


def vertex_attribute(G: nx.Graph, attr: Attr) -> np.ndarray:
    """
    Resolve a vertex attribute into an object array aligned with node_order(G).
    `attr` is either a node attribute name or a sequence with one value per node.
    """
    nodes = node_order(G)
    if isinstance(attr, str):
        data = G.nodes
        missing = [v for v in nodes if attr not in data[v] or data[v][attr] is None]
        if missing:
            raise GraphError(
                f"vertex attribute '{attr}' is missing on {len(missing)} node(s)",
                context={"attribute": attr, "nodes": missing[:5]},
            )
        values = [data[v][attr] for v in nodes]
    else:
        values = list(attr)
        if len(values) != len(nodes):
            raise GraphError(
                f"attribute vector has length {len(values)}, graph has {len(nodes)} nodes",
                context={"length": len(values), "nodes": len(nodes)},
            )
    nan_pos = [k for k, v in enumerate(values) if v is None or (isinstance(v, float) and np.isnan(v))]
    if nan_pos:
        raise GraphError(
            f"attribute has {len(nan_pos)} missing (None/NaN) value(s)",
            context={"nodes": [nodes[k] for k in nan_pos[:5]]},
        )
    out = np.empty(len(values), dtype=object)
    out[:] = values
    return out


def edge_index(G: nx.Graph) -> np.ndarray:
    """
    Return Ex2 array of edge endpoint positions in node_order(G).
    Undirected edges appear once, parallel edges once per copy.
    """
    if G.number_of_edges() == 0:
        return np.empty((0, 2), dtype=int)
    pos = {v: k for k, v in enumerate(node_order(G))}
    return np.array([(pos[u], pos[v]) for u, v in G.edges()], dtype=int)


def has_loops(G: nx.Graph) -> bool:
    return nx.number_of_selfloops(G) > 0


def has_multiple(G: nx.Graph) -> bool:
    """True if a multigraph actually holds parallel edges."""
    if not G.is_multigraph():
        return False
    return any(G.number_of_edges(u, v) > 1 for u, v in G.edges())
