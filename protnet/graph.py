"""
Protein interaction graph: node lookup by alias, edge classification and node removal
"""

import logging
import numbers
from collections import Counter
from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

from .analytics import AnalyticsMixin
from .errors import InvalidArgument, NotFound
from .identity import Handle, IdentifierBundle, IdentityRegistry, NodeRef
from .store import Edge, GraphStore, NodePair, ProteinNode, normalize_pair

logger = logging.getLogger(__name__)


class EdgeClass(Enum):
    """How an incoming interaction was recorded"""

    PRIMARY = 'primary'
    DUPLICATE = 'duplicate'
    REDUNDANT = 'redundant'
    IGNORED = 'ignored'  # self-interaction, nothing stored


class ProteinGraph(AnalyticsMixin, GraphStore):
    """A protein interaction network whose nodes are addressable by any of their ids.

    A dataset may hold the same interaction more than once. When a pair of
    proteins already has a primary edge, a further edge with a different
    interaction id is kept as a duplicate (independent evidence, e.g. from
    another experiment), while one with the same id is kept as redundant (a
    repeated record). Merging datasets with union() relies on this.
    """

    def __init__(self):
        super().__init__()
        self.registry = IdentityRegistry()
        self._dup_edges: List[Edge] = []
        self._dup_keys: Set[Tuple[NodePair, str]] = set()
        self._redundant_edges: List[Edge] = []
        self._redundant_keys: Set[Tuple[NodePair, str]] = set()

    # Lookup

    def _resolve(self, ref: NodeRef) -> Optional[int]:
        if not isinstance(ref, NodeRef):
            raise InvalidArgument(f"I need a Handle or Identifier, not a [{type(ref).__name__}]")
        return ref.lookup(self._nodes, self.registry)

    def _require(self, ref: NodeRef) -> int:
        index = self._resolve(ref)
        if index is None:
            raise NotFound(f"Cannot find node given by {ref!r}")
        return index

    def _find_bundle(self, bundle: IdentifierBundle) -> Optional[int]:
        """Index of the node registered under the bundle's first known alias"""
        for alias in bundle.aliases():
            index = self.registry.resolve(alias)
            if index is not None:
                return index
        return None

    def has_node(self, identifier: str) -> bool:
        """Is a protein with this identifier in the graph?"""
        if not identifier or not isinstance(identifier, str):
            raise InvalidArgument("I need a sequence identifier!")
        return self.registry.has(identifier)

    def node_by_id(self, identifier: str) -> Optional[ProteinNode]:
        index = self.registry.resolve(identifier)
        return self._nodes[index] if index is not None else None

    def nodes_by_id(self, *identifiers: str) -> List[Optional[ProteinNode]]:
        """Nodes for a list of identifiers, None where an id is unknown"""
        return [self.node_by_id(identifier) for identifier in identifiers]

    def node(self, ref: NodeRef) -> ProteinNode:
        return self._nodes[self._require(ref)]

    def nodes(self) -> List[ProteinNode]:
        return list(self._nodes.values())

    def neighbors(self, ref: NodeRef) -> List[ProteinNode]:
        """Interactors of a node, one entry per neighbor list slot"""
        index = self._require(ref)
        return [self._nodes[n] for n in self._neighbors[index]]

    def edge(self, first: NodeRef, second: NodeRef) -> Optional[Edge]:
        """Primary edge between two nodes, if they interact"""
        pair = normalize_pair(self._require(first), self._require(second))
        return self._edges.get(pair)

    def has_edge(self, first: NodeRef, second: NodeRef) -> bool:
        return self.edge(first, second) is not None

    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    def dup_edges(self) -> List[Edge]:
        return list(self._dup_edges)

    def redundant_edges(self) -> List[Edge]:
        return list(self._redundant_edges)

    # Construction

    def _add_bundle(self, bundle: IdentifierBundle) -> ProteinNode:
        node = self._create_node(bundle)
        self.registry.register(node.index, bundle.aliases())
        logger.debug(f"Created node {node.index} for {bundle.accession}")
        return node

    def add_node(self, bundle: IdentifierBundle) -> ProteinNode:
        """Add a protein, or return the node already known under one of its ids"""
        if not isinstance(bundle, IdentifierBundle):
            raise InvalidArgument(f"I need an IdentifierBundle, not a [{type(bundle).__name__}]")
        index = self._find_bundle(bundle)
        if index is not None:
            return self._nodes[index]
        return self._add_bundle(bundle)

    def _endpoint(self, value) -> Tuple[Optional[int], Optional[IdentifierBundle]]:
        """Resolve an edge endpoint to an existing index, or keep the bundle for creation"""
        if value is None:
            raise InvalidArgument("An edge needs two nodes")
        if isinstance(value, IdentifierBundle):
            index = self._find_bundle(value)
            return (index, None) if index is not None else (None, value)
        if isinstance(value, NodeRef):
            index = self._resolve(value)
            if index is None:
                raise InvalidArgument(f"Edge endpoint {value!r} is not present in the graph")
            return index, None
        raise InvalidArgument(
            f"Invalid edge endpoint [{type(value).__name__}] - must be a node reference or identifier bundle"
        )

    def add_edge(self, first, second, interaction_id: str,
                 weight: Optional[float] = None) -> EdgeClass:
        """Add an interaction, classifying it against the pair's primary edge.

        Endpoints are node references (Handle / Identifier) or identifier
        bundles; a bundle not yet known to the graph becomes a new node.
        Interactions of a protein with itself are dropped.
        """
        if not isinstance(interaction_id, str) or not interaction_id:
            raise InvalidArgument(f"Interaction id must be a non-empty string, got: {interaction_id!r}")
        if weight is not None:
            if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
                raise InvalidArgument(f"Weight must be a number, got: {weight!r}")
            weight = float(weight)

        first_index, first_bundle = self._endpoint(first)
        second_index, second_bundle = self._endpoint(second)

        # No self edges
        if first_index is not None and first_index == second_index:
            return EdgeClass.IGNORED
        if first_bundle is not None and second_bundle is not None:
            if set(first_bundle.aliases()) & set(second_bundle.aliases()):
                return EdgeClass.IGNORED

        if first_index is None:
            first_index = self._add_bundle(first_bundle).index
        if second_index is None:
            second_index = self._add_bundle(second_bundle).index

        pair = normalize_pair(first_index, second_index)
        edge = Edge(nodes=pair, interaction_id=interaction_id, weight=weight)
        current = self._edges.get(pair)

        if current is None:
            self._link(edge)
            return EdgeClass.PRIMARY

        # Same interaction id as the primary edge: a repeated record
        if current.interaction_id == interaction_id:
            self._record_redundant(edge)
            return EdgeClass.REDUNDANT

        # Duplicate evidence is listed once per (pair, id)
        if edge.key in self._dup_keys:
            return EdgeClass.DUPLICATE

        self._dup_edges.append(edge)
        self._dup_keys.add(edge.key)
        logger.debug(f"Duplicate edge {interaction_id} for pair {pair} (primary {current.interaction_id})")
        return EdgeClass.DUPLICATE

    def _record_redundant(self, edge: Edge):
        if edge.key not in self._redundant_keys:
            self._redundant_edges.append(edge)
            self._redundant_keys.add(edge.key)
            logger.debug(f"Redundant edge {edge.interaction_id} for pair {edge.nodes}")

    def add_interactions(self, records: Iterable[tuple]) -> Counter:
        """Add (endpoint, endpoint, interaction id, weight) records, counting classifications"""
        counts = Counter()
        for first, second, interaction_id, weight in records:
            counts[self.add_edge(first, second, interaction_id, weight)] += 1
        return counts

    # Removal

    def _drop_records(self, records: List[Edge], keys: Set[Tuple[NodePair, str]],
                      indices: Set[int]) -> List[Edge]:
        kept = [edge for edge in records if not any(edge.touches(index) for index in indices)]
        keys.intersection_update(edge.key for edge in kept)
        return kept

    def remove_dup_edges(self, *refs: NodeRef):
        """Remove all duplicate edges, or only those touching the given nodes"""
        if not refs:
            self._dup_edges = []
            self._dup_keys = set()
            return
        indices = {self._require(ref) for ref in refs}
        self._dup_edges = self._drop_records(self._dup_edges, self._dup_keys, indices)

    def remove_redundant_edges(self, *refs: NodeRef):
        """Remove all redundant edges, or only those touching the given nodes"""
        if not refs:
            self._redundant_edges = []
            self._redundant_keys = set()
            return
        indices = {self._require(ref) for ref in refs}
        self._redundant_edges = self._drop_records(self._redundant_edges, self._redundant_keys, indices)

    def remove_nodes(self, *refs: NodeRef) -> List[ProteinNode]:
        """Delete nodes and everything referencing them, e.g. to simulate a knockout.

        Every reference is resolved before anything is deleted, so an unknown
        node leaves the graph untouched.
        """
        if not refs:
            logger.warning("remove_nodes called without any node")
            return []

        indices = []
        for ref in refs:
            index = self._require(ref)
            if index not in indices:
                indices.append(index)

        removed = []
        for index in indices:
            # 1. Duplicate and redundant edges containing the node
            self.remove_dup_edges(Handle(index))
            self.remove_redundant_edges(Handle(index))

            # 2. Node from its interactors' neighbor lists
            for neighbor in set(self._neighbors[index]):
                self._neighbors[neighbor] = [n for n in self._neighbors[neighbor] if n != index]

            # 3. Its own neighbor entry
            del self._neighbors[index]

            # 4. Primary edges involving the node
            for pair in [pair for pair in self._edges if index in pair]:
                del self._edges[pair]

            # 5. The node and its aliases
            node = self._nodes.pop(index)
            purged = self.registry.purge(index)
            logger.debug(f"Removed node {node.accession} and {len(purged)} aliases")
            removed.append(node)

        self._invalidate()
        logger.info(f"Removed {len(removed)} nodes; {self.node_count():,} nodes, "
                    f"{self.edge_count():,} edges remain")
        return removed

    # Merging

    def union(self, other: 'ProteinGraph'):
        """Merge another graph into this one; the other graph is left unchanged"""
        from .merge import GraphMerger
        return GraphMerger(self, other).merge()
