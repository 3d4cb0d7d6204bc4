"""Tests for the owners-count CLI."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from src.owners.cli import app
from src.owners.errors import InvalidGroupError, MissingCredentialError
from src.owners.models import AggregateResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch("src.owners.cli.configure_sanitized_logging"):
        yield


def _result() -> AggregateResult:
    return AggregateResult(
        reviewers={"alice", "bob"},
        approvers={"carol"},
        unresolved=["ghost"],
    )


class TestCountCommand:
    """Test suite for the count command."""

    def test_prints_counts(self, tmp_path) -> None:
        with patch("src.owners.cli.count_group", return_value=_result()) as count_group:
            result = runner.invoke(app, ["sig-node", "--workdir", str(tmp_path)])

        assert result.exit_code == 0
        assert "Reviewers: 2" in result.output
        assert "Approvers: 1" in result.output
        assert "ghost" in result.output
        assert count_group.call_args.args[0] == "sig-node"
        assert count_group.call_args.kwargs["clone"] is True

    def test_lists_members(self, tmp_path) -> None:
        with patch("src.owners.cli.count_group", return_value=_result()):
            result = runner.invoke(app, ["sig-node", "--workdir", str(tmp_path), "--list"])

        assert result.exit_code == 0
        for account in ("alice", "bob", "carol"):
            assert account in result.output

    def test_json_output(self, tmp_path) -> None:
        with patch("src.owners.cli.count_group", return_value=_result()):
            result = runner.invoke(app, ["sig-node", "--workdir", str(tmp_path), "--json"])

        assert result.exit_code == 0
        assert '"reviewer_count": 2' in result.output
        assert '"group": "sig-node"' in result.output

    def test_registry_option_passed_to_config(self, tmp_path) -> None:
        registry = tmp_path / "sigs.yaml"

        with patch("src.owners.cli.count_group", return_value=_result()) as count_group:
            runner.invoke(app, ["sig-node", "-w", str(tmp_path), "--registry", str(registry)])

        config = count_group.call_args.args[1]
        assert config.registry_path == str(registry)

    def test_fatal_error_exits_nonzero(self, tmp_path) -> None:
        with patch("src.owners.cli.count_group", side_effect=InvalidGroupError("node")):
            result = runner.invoke(app, ["node", "--workdir", str(tmp_path)])

        assert result.exit_code == 1
        assert "invalid group name format" in result.output

    def test_missing_token_exits_nonzero(self, tmp_path) -> None:
        with patch("src.owners.cli.count_group", side_effect=MissingCredentialError()):
            result = runner.invoke(app, ["sig-node", "--workdir", str(tmp_path)])

        assert result.exit_code == 1
        assert "GITHUB_TOKEN" in result.output

    def test_temporary_workdir_removed(self) -> None:
        seen = {}

        def _fake_count(group, config, workdir, clone):
            seen["workdir"] = workdir
            return _result()

        with patch("src.owners.cli.count_group", side_effect=_fake_count):
            result = runner.invoke(app, ["sig-node"])

        assert result.exit_code == 0
        assert not seen["workdir"].exists()

    def test_no_clone_requires_workdir(self) -> None:
        with patch("src.owners.cli.count_group") as count_group:
            result = runner.invoke(app, ["sig-node", "--no-clone"])

        assert result.exit_code == 1
        count_group.assert_not_called()

    def test_no_clone_with_workdir(self, tmp_path) -> None:
        with patch("src.owners.cli.count_group", return_value=_result()) as count_group:
            runner.invoke(app, ["sig-node", "--workdir", str(tmp_path), "--no-clone"])

        assert count_group.call_args.kwargs["clone"] is False
