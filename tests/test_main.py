"""Tests for the command-line interface."""

import main


class TestMain:
    """Tests for main.main exit codes and output."""

    def test_list_datasets(self, capsys):
        """Test listing datasets exits cleanly and names each one."""
        assert main.main(["--list-datasets"]) == 0

        out = capsys.readouterr().out
        assert "downtown" in out
        assert "no_freezer" in out

    def test_unknown_dataset(self, capsys):
        """Test an unknown dataset is a data loading error."""
        assert main.main(["--dataset", "atlantis"]) == 1

        assert "Unknown dataset 'atlantis'" in capsys.readouterr().out

    def test_downtown_run(self, capsys):
        """Test a full run prints the results table."""
        assert main.main(["--dataset", "downtown", "--seed", "3"]) == 0

        out = capsys.readouterr().out
        assert "FINAL RESULTS" in out
        assert "10/10" in out

    def test_stranded_orders_reported(self, capsys):
        """Test stranded frozen orders are called out."""
        assert main.main(["--dataset", "no_freezer", "--traffic", "--seed", "1"]) == 0

        assert "No eligible vehicle for #2002, #2004" in capsys.readouterr().out
