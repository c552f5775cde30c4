"""
Pytest configuration and fixtures for ProtNet tests
"""

import pytest
import pandas as pd

from protnet.graph import ProteinGraph
from protnet.identity import IdentifierBundle


def protein(accession, *xrefs, primary_id=None):
    """Shorthand for an identifier bundle"""
    return IdentifierBundle(accession=accession, primary_id=primary_id, xrefs=xrefs)


def build(interactions):
    """Graph from (accession, accession, interaction id) triples"""
    graph = ProteinGraph()
    for first, second, interaction_id in interactions:
        graph.add_edge(protein(first), protein(second), interaction_id, 1.0)
    return graph


@pytest.fixture
def empty_graph():
    return ProteinGraph()


@pytest.fixture
def graph1():
    """First dataset of the merge example"""
    return build([
        ("P1", "P2", "E1"),
        ("P3", "P4", "E2"),
        ("P1", "P4", "E3"),
    ])


@pytest.fixture
def graph2():
    """Second dataset of the merge example"""
    return build([
        ("P1", "P2", "X1"),
        ("P1", "X4", "X2"),
        ("P2", "P3", "X3"),
        ("Z4", "Z5", "X4"),
    ])


@pytest.fixture
def path_graph():
    """A - B - C - D"""
    return build([("A", "B", "e1"), ("B", "C", "e2"), ("C", "D", "e3")])


@pytest.fixture
def star_graph():
    return build([("C", "L1", "s1"), ("C", "L2", "s2"), ("C", "L3", "s3")])


@pytest.fixture
def triangle_graph():
    return build([("A", "B", "t1"), ("B", "C", "t2"), ("A", "C", "t3")])


@pytest.fixture
def sample_interactions_data():
    """Sample interaction table"""
    return pd.DataFrame([
        {"accession_a": "P12345", "accession_b": "Q67890", "primary_id_a": "ATP1A1_HUMAN",
         "primary_id_b": "MYOD1_HUMAN", "xrefs_a": "ENSP00000000233|ATP1A1",
         "xrefs_b": "ENSP00000001234", "interaction_id": "EBI-1001", "weight": 0.65},
        {"accession_a": "Q67890", "accession_b": "P00123", "primary_id_a": "MYOD1_HUMAN",
         "primary_id_b": "CYC1_HUMAN", "xrefs_a": "", "xrefs_b": "ENSP00000005678|CYC1",
         "interaction_id": "EBI-1002", "weight": 0.5},
        {"accession_a": "P12345", "accession_b": "P00123", "primary_id_a": "",
         "primary_id_b": "", "xrefs_a": "", "xrefs_b": "",
         "interaction_id": "EBI-1003", "weight": 0.9},
        # Same pair as the first row, reported by another experiment
        {"accession_a": "ENSP00000001234", "accession_b": "P12345", "primary_id_a": "",
         "primary_id_b": "", "xrefs_a": "", "xrefs_b": "",
         "interaction_id": "EBI-2001", "weight": 0.4},
    ])


@pytest.fixture
def sample_table(tmp_path, sample_interactions_data):
    """Sample interaction table written as TSV"""
    table = tmp_path / "interactions.tsv"
    sample_interactions_data.to_csv(table, sep='\t', index=False)
    return table


@pytest.fixture
def second_table(tmp_path):
    """A second dataset sharing some proteins with the sample table"""
    table = tmp_path / "second.tsv"
    pd.DataFrame([
        {"accession_a": "P12345", "accession_b": "Q67890", "interaction_id": "BG-1", "weight": 0.8},
        {"accession_a": "P00123", "accession_b": "O11111", "interaction_id": "BG-2", "weight": 0.7},
        {"accession_a": "Z00001", "accession_b": "Z00002", "interaction_id": "BG-3", "weight": 0.3},
    ]).to_csv(table, sep='\t', index=False)
    return table
