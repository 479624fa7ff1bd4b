"""CLI tests — click's CliRunner, no subprocess."""

from click.testing import CliRunner

from bazaar.auth.tokens import Role, verify_token
from bazaar.cli import cli


def test_issue_token_default_role():
    result = CliRunner().invoke(cli, ["issue-token", "user-42"])
    assert result.exit_code == 0, result.output
    identity = verify_token(result.output.strip())
    assert identity.subject_user_id == "user-42"
    assert identity.role is Role.STANDARD


def test_issue_token_seller():
    result = CliRunner().invoke(cli, ["issue-token", "user-42", "--role", "seller"])
    assert result.exit_code == 0
    assert verify_token(result.output.strip()).role is Role.SELLER


def test_issue_token_rejects_unknown_role():
    result = CliRunner().invoke(cli, ["issue-token", "user-42", "--role", "admin"])
    assert result.exit_code != 0


def test_serve_help():
    result = CliRunner().invoke(cli, ["serve", "--help"])
    assert result.exit_code == 0
    assert "--port" in result.output
