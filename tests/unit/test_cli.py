"""
Unit tests for CLI functionality
"""

import pytest
import pandas as pd
from click.testing import CliRunner

from protnet.cli import cli


@pytest.mark.cli
class TestCLICommands:
    """Test CLI command functionality"""

    @pytest.fixture
    def runner(self):
        """Click testing runner"""
        return CliRunner()

    @pytest.fixture
    def path_table(self, tmp_path):
        """A - B - C - D as a CSV table"""
        table = tmp_path / "path.csv"
        pd.DataFrame([
            {"accession_a": "A", "accession_b": "B", "interaction_id": "e1"},
            {"accession_a": "B", "accession_b": "C", "interaction_id": "e2"},
            {"accession_a": "C", "accession_b": "D", "interaction_id": "e3"},
        ]).to_csv(table, index=False)
        return table

    def test_help_command(self, runner):
        result = runner.invoke(cli, ['--help'])

        assert result.exit_code == 0
        assert "Protein interaction network analysis" in result.output

    def test_stats_command(self, runner, sample_table):
        result = runner.invoke(cli, ['stats', str(sample_table)])

        assert result.exit_code == 0
        assert "Proteins: 3" in result.output
        assert "Interactions: 3" in result.output
        assert "Duplicate: 1" in result.output
        assert "Density: 1.0000" in result.output
        assert "Connected: yes" in result.output

    def test_stats_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ['stats', str(tmp_path / "missing.tsv")])
        assert result.exit_code != 0

    def test_stats_bad_table(self, runner, tmp_path):
        table = tmp_path / "bad.tsv"
        pd.DataFrame([{"a": "P1", "b": "P2"}]).to_csv(table, sep='\t', index=False)

        result = runner.invoke(cli, ['stats', str(table)])

        assert result.exit_code == 1
        assert "missing required columns" in result.output

    def test_explicit_separator(self, runner, tmp_path):
        table = tmp_path / "pipe.txt"
        table.write_text("accession_a;accession_b;interaction_id\nP1;P2;E1\n")

        result = runner.invoke(cli, ['--sep', ';', 'stats', str(table)])

        assert result.exit_code == 0
        assert "Proteins: 2" in result.output

    def test_merge_command(self, runner, sample_table, second_table):
        result = runner.invoke(cli, ['merge', str(sample_table), str(second_table)])

        assert result.exit_code == 0
        assert "Shared proteins: 3" in result.output
        assert "New interactions: 1" in result.output
        assert "Duplicate interactions: 1" in result.output
        assert "Proteins copied: 1" in result.output
        assert "Proteins: 4" in result.output

    def test_articulation_command(self, runner, path_table):
        result = runner.invoke(cli, ['articulation', str(path_table)])

        assert result.exit_code == 0
        assert "Found 2 articulation points" in result.output
        assert "- B (2 interactors)" in result.output
        assert "- C (2 interactors)" in result.output

    def test_articulation_none(self, runner, sample_table):
        result = runner.invoke(cli, ['articulation', str(sample_table)])

        assert result.exit_code == 0
        assert "No articulation points found" in result.output

    def test_clustering_command(self, runner, path_table):
        result = runner.invoke(cli, ['clustering', str(path_table), 'B', 'A'])

        assert result.exit_code == 0
        assert "B: 0.0000" in result.output
        assert "A: not calculable" in result.output

    def test_clustering_unknown_protein(self, runner, path_table):
        result = runner.invoke(cli, ['clustering', str(path_table), 'Q99999'])

        assert result.exit_code == 1
        assert "Cannot find node" in result.output

    def test_hubs_command(self, runner, path_table):
        result = runner.invoke(cli, ['hubs', str(path_table), '--min-degree', '1'])

        assert result.exit_code == 0
        assert "2 proteins have > 1 interactors" in result.output

    def test_remove_command(self, runner, path_table):
        result = runner.invoke(cli, ['remove', str(path_table), 'B'])

        assert result.exit_code == 0
        assert "Removed 1 proteins: B" in result.output
        assert "Proteins: 3" in result.output
        assert "Components: 2" in result.output
        assert "Unconnected proteins: 1" in result.output
