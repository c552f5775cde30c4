"""
Reading interaction tables into protein graphs
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple, Optional, Tuple

import pandas as pd

from .errors import InvalidArgument
from .graph import ProteinGraph
from .identity import IdentifierBundle

logger = logging.getLogger(__name__)


class InteractionRecord(NamedTuple):
    """One parsed interaction: two proteins, an interaction id and a confidence weight"""

    first: IdentifierBundle
    second: IdentifierBundle
    interaction_id: str
    weight: Optional[float]


@dataclass
class TableFormat:
    """Column layout of an interaction table"""

    accession_a: str = 'accession_a'
    accession_b: str = 'accession_b'
    primary_id_a: str = 'primary_id_a'
    primary_id_b: str = 'primary_id_b'
    xrefs_a: str = 'xrefs_a'
    xrefs_b: str = 'xrefs_b'
    interaction_id: str = 'interaction_id'
    weight: str = 'weight'
    sep: str = '\t'
    xref_sep: str = '|'
    default_weight: Optional[float] = None
    chunk_size: int = 50000

    @classmethod
    def csv(cls, **overrides) -> 'TableFormat':
        return cls(sep=',', **overrides)

    @classmethod
    def for_path(cls, file_path: Path, **overrides) -> 'TableFormat':
        """Guess the separator from the file name"""
        suffixes = [s.lower() for s in Path(file_path).suffixes]
        if '.csv' in suffixes:
            return cls.csv(**overrides)
        return cls(**overrides)

    @property
    def required_columns(self) -> Tuple[str, ...]:
        return (self.accession_a, self.accession_b, self.interaction_id)


class InteractionTableReader:
    """Reads delimited interaction files in chunks and yields interaction records"""

    def __init__(self, table_format: Optional[TableFormat] = None):
        self.table_format = table_format or TableFormat()

    def read(self, file_path: Path) -> Iterator[InteractionRecord]:
        fmt = self.table_format
        file_path = Path(file_path)
        logger.info(f"Reading interactions from {file_path}")

        total_rows = 0
        skipped = 0
        chunk_reader = pd.read_csv(file_path, sep=fmt.sep, chunksize=fmt.chunk_size, dtype=str)

        for chunk_num, chunk in enumerate(chunk_reader, 1):
            missing = [col for col in fmt.required_columns if col not in chunk.columns]
            if missing:
                raise InvalidArgument(f"{file_path} is missing required columns: {', '.join(missing)}")

            logger.debug(f"Processing chunk {chunk_num} ({len(chunk):,} rows)")
            for _, row in chunk.iterrows():
                total_rows += 1
                record = self.parse_row(row)
                if record is None:
                    skipped += 1
                    continue
                yield record

        if skipped:
            logger.warning(f"Skipped {skipped:,} incomplete rows in {file_path}")
        logger.info(f"Read {total_rows - skipped:,} interactions from {file_path}")

    def parse_row(self, row: pd.Series) -> Optional[InteractionRecord]:
        """Turn one table row into a record, or None if it lacks required values"""
        fmt = self.table_format
        accession_a = self._cell(row, fmt.accession_a)
        accession_b = self._cell(row, fmt.accession_b)
        interaction_id = self._cell(row, fmt.interaction_id)
        if not (accession_a and accession_b and interaction_id):
            return None

        first = IdentifierBundle(
            accession=accession_a,
            primary_id=self._cell(row, fmt.primary_id_a),
            xrefs=self._split_xrefs(self._cell(row, fmt.xrefs_a)),
        )
        second = IdentifierBundle(
            accession=accession_b,
            primary_id=self._cell(row, fmt.primary_id_b),
            xrefs=self._split_xrefs(self._cell(row, fmt.xrefs_b)),
        )

        weight = fmt.default_weight
        raw_weight = self._cell(row, fmt.weight)
        if raw_weight is not None:
            try:
                weight = float(raw_weight)
            except ValueError:
                logger.warning(f"Ignoring non-numeric weight {raw_weight!r} for {interaction_id}")

        return InteractionRecord(first, second, interaction_id, weight)

    def _cell(self, row: pd.Series, column: str) -> Optional[str]:
        if column not in row.index:
            return None
        value = row[column]
        if pd.isna(value):
            return None
        value = str(value).strip()
        return value or None

    def _split_xrefs(self, value: Optional[str]) -> Tuple[str, ...]:
        if not value:
            return ()
        return tuple(part.strip() for part in value.split(self.table_format.xref_sep) if part.strip())


def build_graph(records, graph: Optional[ProteinGraph] = None) -> ProteinGraph:
    """Add interaction records to a graph (a new one by default)"""
    graph = graph if graph is not None else ProteinGraph()
    counts = graph.add_interactions(records)
    logger.info(f"Graph built: {graph.node_count():,} nodes, {graph.edge_count():,} edges "
                f"({sum(counts.values()):,} interactions added)")
    return graph


def load_graph(file_path: Path, table_format: Optional[TableFormat] = None) -> ProteinGraph:
    """Read an interaction table into a new graph"""
    table_format = table_format or TableFormat.for_path(file_path)
    reader = InteractionTableReader(table_format)
    return build_graph(reader.read(file_path))
