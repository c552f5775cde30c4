"""
Merging of protein interaction graphs built from different datasets
"""

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import List, Optional, Set, Tuple

from .errors import InvalidGraph
from .graph import EdgeClass, ProteinGraph
from .identity import Handle, Identifier
from .store import NodePair, ProteinNode, normalize_pair

logger = logging.getLogger(__name__)


@dataclass
class MergeReport:
    """What a union() call did to the destination graph"""

    shared_nodes: int = 0
    nodes_copied: int = 0
    ambiguous_matches: int = 0
    classifications: Counter = field(default_factory=Counter)

    @property
    def primary_added(self) -> int:
        return self.classifications[EdgeClass.PRIMARY]

    @property
    def duplicates_added(self) -> int:
        return self.classifications[EdgeClass.DUPLICATE]

    @property
    def redundant_added(self) -> int:
        return self.classifications[EdgeClass.REDUNDANT]


class GraphMerger:
    """Merges a source graph into a destination graph using shared identifiers.

    Nodes are matched across graphs by any of their aliases, so a protein
    known under different ids in each dataset is still recognised:

    1. an interaction present in both graphs becomes a duplicate (or
       redundant) edge in the destination,
    2. an interaction between two proteins both already in the destination
       becomes a new edge there,
    3. an interaction with one protein new to the destination copies that
       protein in and links it,
    4. an interaction between two proteins both new to the destination is
       not imported, since it is unknown whether they are synonyms of
       existing nodes.

    When a source neighbor's aliases match several destination nodes the
    first match (in alias order) is its target and the ambiguity is counted
    in the report. Each of those destination nodes is itself a shared node,
    so the interaction still reaches all of them when they are processed.
    """

    def __init__(self, destination: ProteinGraph, source: ProteinGraph):
        if not isinstance(source, ProteinGraph):
            raise InvalidGraph(f"I need a ProteinGraph object, not a [{type(source).__name__}] object")
        self.destination = destination
        self.source = source

    def shared_identifiers(self) -> List[str]:
        """One identifier per destination node that also occurs in the source"""
        shared = []
        seen_nodes = set()
        for alias in sorted(self.destination.registry):
            if alias not in self.source.registry:
                continue
            index = self.destination.registry.resolve(alias)
            if index not in seen_nodes:
                seen_nodes.add(index)
                shared.append(alias)
        return shared

    def merge(self) -> MergeReport:
        report = MergeReport()
        shared = self.shared_identifiers()
        report.shared_nodes = len(shared)
        logger.info(f"Merging graphs: {len(shared):,} shared nodes "
                    f"(destination {self.destination.node_count():,} nodes, "
                    f"source {self.source.node_count():,} nodes)")

        submitted: Set[Tuple[NodePair, str]] = set()
        for identifier in shared:
            self._merge_shared_node(identifier, submitted, report)

        logger.info(f"Merge complete: {report.primary_added:,} new edges, "
                    f"{report.duplicates_added:,} duplicate, {report.redundant_added:,} redundant, "
                    f"{report.nodes_copied:,} nodes copied")
        return report

    def _merge_shared_node(self, identifier: str, submitted: Set[Tuple[NodePair, str]],
                           report: MergeReport):
        common = self.destination.node(Identifier(identifier))
        source_common = self.source.node(Identifier(identifier))

        for source_neighbor in self.source.neighbors(source_common.handle):
            source_edge = self.source.edge(source_common.handle, source_neighbor.handle)

            target = self._first_match(source_neighbor, report)
            if target is None:
                target = self.destination.add_node(replace(source_neighbor.bundle))
                report.nodes_copied += 1
                logger.debug(f"Copied {source_neighbor.accession} into destination graph")

            # Each destination interaction is submitted once, whichever shared node reaches it
            key = (normalize_pair(common.index, target.index), source_edge.interaction_id)
            if key in submitted:
                continue
            submitted.add(key)

            result = self.destination.add_edge(common.handle, target.handle,
                                               source_edge.interaction_id, source_edge.weight)
            report.classifications[result] += 1

    def _first_match(self, source_node: ProteinNode, report: MergeReport) -> Optional[ProteinNode]:
        registry = self.destination.registry
        matches = [registry.resolve(alias) for alias in source_node.aliases() if alias in registry]
        if not matches:
            return None
        if len(set(matches)) > 1:
            report.ambiguous_matches += 1
            logger.debug(f"{source_node.accession} matches {len(set(matches))} destination nodes, "
                         f"using the first")
        return self.destination.node(Handle(matches[0]))
