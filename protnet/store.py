"""
Node and edge storage underlying the protein interaction graph
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

import networkx as nx

from .identity import Handle, IdentifierBundle

logger = logging.getLogger(__name__)

NodePair = Tuple[int, int]


def normalize_pair(first: int, second: int) -> NodePair:
    """Order two node indices so a pair always maps to the same key"""
    return (first, second) if first <= second else (second, first)


@dataclass(frozen=True)
class ProteinNode:
    """A protein in the graph: its arena index plus its identifiers"""

    index: int
    bundle: IdentifierBundle

    @property
    def handle(self) -> Handle:
        return Handle(self.index)

    @property
    def accession(self) -> str:
        return self.bundle.accession

    def aliases(self) -> List[str]:
        return self.bundle.aliases()


@dataclass(frozen=True)
class Edge:
    """One recorded interaction between two nodes"""

    nodes: NodePair
    interaction_id: str
    weight: Optional[float] = None

    @property
    def key(self) -> Tuple[NodePair, str]:
        return (self.nodes, self.interaction_id)

    def touches(self, node_index: int) -> bool:
        return node_index in self.nodes


class GraphStore:
    """Node arena, primary edge map and neighbor adjacency"""

    def __init__(self):
        self._nodes: Dict[int, ProteinNode] = {}
        self._edges: Dict[NodePair, Edge] = {}
        self._neighbors: Dict[int, List[int]] = {}
        self._next_index = 0
        self._is_connected: Optional[bool] = None

    def _create_node(self, bundle: IdentifierBundle) -> ProteinNode:
        node = ProteinNode(index=self._next_index, bundle=bundle)
        self._next_index += 1
        self._nodes[node.index] = node
        self._neighbors[node.index] = []
        self._invalidate()
        return node

    def _link(self, edge: Edge):
        """Store a primary edge and record both endpoints as neighbors"""
        first, second = edge.nodes
        self._edges[edge.nodes] = edge
        self._neighbors[first].append(second)
        self._neighbors[second].append(first)
        self._invalidate()

    def _invalidate(self):
        self._is_connected = None

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        """Number of unique interactions, excluding duplicates and redundancies"""
        return len(self._edges)

    def degree(self, node_index: int) -> int:
        return len(self._neighbors[node_index])

    def components(self) -> List[Set[int]]:
        """Connected components as sets of node indices, largest first"""
        components = [set(c) for c in nx.connected_components(self.to_networkx())]
        components.sort(key=lambda c: (-len(c), min(c)))
        return components

    def is_connected(self) -> bool:
        """Whether all nodes form a single component (cached until the next change)"""
        if self._is_connected is None:
            if not self._nodes:
                self._is_connected = False
            else:
                self._is_connected = nx.is_connected(self.to_networkx())
        return self._is_connected

    def to_networkx(self) -> nx.Graph:
        """Build a NetworkX graph of primary edges keyed by node index"""
        graph = nx.Graph()

        for index, node in self._nodes.items():
            graph.add_node(index, accession=node.accession)

        for (first, second), edge in self._edges.items():
            graph.add_edge(first, second,
                           interaction_id=edge.interaction_id,
                           weight=edge.weight)

        return graph
