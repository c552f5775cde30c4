"""
Protein identifiers, typed node references and the alias registry
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import InvalidArgument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentifierBundle:
    """All identifiers known for one protein, as produced by a parser.

    Attributes:
        accession: Accession number (e.g. a UniProt AC), required
        primary_id: Source-specific primary identifier
        xrefs: Cross-reference identifiers from other databases

    Raises:
        InvalidArgument: If the accession is empty or not a string
    """

    accession: str
    primary_id: Optional[str] = None
    xrefs: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.accession, str) or not self.accession:
            raise InvalidArgument(f"Accession must be a non-empty string, got: {self.accession!r}")
        if self.primary_id is not None and not isinstance(self.primary_id, str):
            raise InvalidArgument(f"Primary id must be a string, got: {type(self.primary_id).__name__}")
        # Accept any iterable of ids but store a tuple so the bundle stays hashable
        object.__setattr__(self, 'xrefs', tuple(self.xrefs))
        for xref in self.xrefs:
            if not isinstance(xref, str):
                raise InvalidArgument(f"Cross-reference ids must be strings, got: {xref!r}")

    def aliases(self) -> List[str]:
        """Flat, ordered list of every identifier (accession first)"""
        seen = []
        for alias in (self.accession, self.primary_id, *self.xrefs):
            if alias and alias not in seen:
                seen.append(alias)
        return seen


class NodeRef(ABC):
    """A caller-supplied reference to a node, resolved by the graph"""

    @abstractmethod
    def lookup(self, nodes: Mapping[int, object], registry: 'IdentityRegistry') -> Optional[int]:
        """Index of the referenced node, or None if it is not in the graph"""


@dataclass(frozen=True)
class Handle(NodeRef):
    """Reference to a node by its arena index"""

    index: int

    def lookup(self, nodes, registry):
        return self.index if self.index in nodes else None


@dataclass(frozen=True)
class Identifier(NodeRef):
    """Reference to a node by any of its aliases"""

    value: str

    def lookup(self, nodes, registry):
        return registry.resolve(self.value)


class IdentityRegistry:
    """Maps every known alias to the index of the node it identifies"""

    def __init__(self):
        self._index: Dict[str, int] = {}

    def register(self, node_index: int, aliases) -> List[str]:
        """Register aliases for a node without overwriting existing mappings"""
        added = []
        for alias in aliases:
            if alias in self._index:
                if self._index[alias] != node_index:
                    logger.debug(f"Alias {alias} already maps to node {self._index[alias]}, "
                                 f"not reassigning to {node_index}")
                continue
            self._index[alias] = node_index
            added.append(alias)
        return added

    def resolve(self, alias: str) -> Optional[int]:
        return self._index.get(alias)

    def has(self, alias: str) -> bool:
        return alias in self._index

    def aliases_of(self, node_index: int) -> List[str]:
        return [alias for alias, index in self._index.items() if index == node_index]

    def purge(self, node_index: int) -> List[str]:
        """Forget every alias pointing at a node"""
        purged = self.aliases_of(node_index)
        for alias in purged:
            del self._index[alias]
        return purged

    def __contains__(self, alias) -> bool:
        return alias in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)
