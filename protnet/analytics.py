"""
Network analytics for protein interaction graphs
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Set

from .store import ProteinNode, normalize_pair

logger = logging.getLogger(__name__)


@dataclass
class GraphSummary:
    """Headline statistics of a graph"""

    num_nodes: int
    num_edges: int
    num_duplicate_edges: int
    num_redundant_edges: int
    num_components: int
    num_unconnected: int
    density: float
    is_connected: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AnalyticsMixin:
    """Graph-level queries; expects GraphStore state and ProteinGraph lookups"""

    def density(self) -> float:
        """Primary edge count relative to the maximum possible for the node count"""
        n = self.node_count()
        if n < 2:
            return 0.0
        return self.edge_count() / (n * (n - 1) / 2)

    def clustering_coefficient(self, ref) -> float:
        """Fraction of a node's neighbor pairs that interact with each other.

        Returns -1 if the coefficient cannot be calculated (fewer than two
        neighbors); 0 is a valid result. Raises NotFound for an unknown node.
        """
        index = self._require(ref)
        neighbors = self._neighbors[index]
        k = len(neighbors)
        if k < 2:
            return -1

        linked = 0
        for i in range(k):
            for j in range(i + 1, k):
                if normalize_pair(neighbors[i], neighbors[j]) in self._edges:
                    linked += 1
        return 2 * linked / (k * (k - 1))

    def unconnected_nodes(self) -> List[ProteinNode]:
        """Nodes with no interactions"""
        return [self._nodes[index] for index, neighbors in self._neighbors.items() if not neighbors]

    def hubs(self, min_degree: int = 10) -> List[ProteinNode]:
        """Nodes with more than min_degree interactors, most connected first"""
        hubs = [node for node in self._nodes.values() if self.degree(node.index) > min_degree]
        hubs.sort(key=lambda node: (-self.degree(node.index), node.index))
        return hubs

    def articulation_points(self) -> List[ProteinNode]:
        """Nodes whose removal would fragment the graph into more components.

        Recomputed from scratch on every call; fine for graphs up to a few
        thousand nodes.
        """
        points: Set[int] = set()
        for component in self.components():
            # Pairs and isolated nodes cannot contain a cut vertex
            if len(component) < 3:
                continue
            points |= self._component_cut_vertices(component)

        logger.debug(f"Found {len(points)} articulation points")
        return [self._nodes[index] for index in sorted(points)]

    def _component_cut_vertices(self, component: Set[int]) -> Set[int]:
        # Start from the most connected node, lowest index on ties
        root = max(sorted(component), key=self.degree)

        preorder = {root: 0}
        parent = {root: None}
        stack = [(root, iter(sorted(set(self._neighbors[root]))))]
        while stack:
            node, pending = stack[-1]
            for neighbor in pending:
                if neighbor not in preorder:
                    preorder[neighbor] = len(preorder)
                    parent[neighbor] = node
                    stack.append((neighbor, iter(sorted(set(self._neighbors[neighbor])))))
                    break
            else:
                stack.pop()

        low: Dict[int, int] = {}
        cut = set()
        for node in sorted(preorder, key=preorder.get, reverse=True):
            low[node] = preorder[node]
            children = []
            for neighbor in set(self._neighbors[node]):
                if parent[neighbor] == node:
                    children.append(neighbor)
                    low[node] = min(low[node], low[neighbor])
                elif preorder[neighbor] < preorder[node]:
                    # Back edge (or the tree edge to the parent)
                    low[node] = min(low[node], preorder[neighbor])

            if node == root:
                if len(children) > 1:
                    cut.add(node)
            elif any(low[child] >= preorder[node] for child in children):
                cut.add(node)
        return cut

    def summary(self) -> GraphSummary:
        return GraphSummary(
            num_nodes=self.node_count(),
            num_edges=self.edge_count(),
            num_duplicate_edges=len(self.dup_edges()),
            num_redundant_edges=len(self.redundant_edges()),
            num_components=len(self.components()),
            num_unconnected=len(self.unconnected_nodes()),
            density=self.density(),
            is_connected=self.is_connected(),
        )
