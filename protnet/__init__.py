"""
ProtNet: protein interaction networks merged across datasets
"""

from .errors import InvalidArgument, InvalidGraph, NotFound, ProteinGraphError
from .graph import EdgeClass, ProteinGraph
from .identity import Handle, Identifier, IdentifierBundle
from .ingestion import InteractionRecord, InteractionTableReader, TableFormat, load_graph
from .merge import GraphMerger, MergeReport

__version__ = "0.1.0"
__all__ = [
    "EdgeClass",
    "GraphMerger",
    "Handle",
    "Identifier",
    "IdentifierBundle",
    "InteractionRecord",
    "InteractionTableReader",
    "InvalidArgument",
    "InvalidGraph",
    "MergeReport",
    "NotFound",
    "ProteinGraph",
    "ProteinGraphError",
    "TableFormat",
    "load_graph",
]
