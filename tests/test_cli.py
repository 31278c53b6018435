"""Tests for the vidshare command line."""

from unittest.mock import patch

from click.testing import CliRunner

from vidshare.cli import cli, generate_secret, write_env_value


class TestGenerateSecret:
    def test_formats(self):
        assert len(generate_secret("hex", 16)) == 32
        assert "=" not in generate_secret("urlsafe")
        assert generate_secret("base64", 3).isascii()

    def test_secrets_differ(self):
        assert generate_secret() != generate_secret()


class TestWriteEnvValue:
    def test_appends_to_new_file(self, tmp_path):
        env = tmp_path / ".env"
        write_env_value(env, "SECRET_KEY", "abc")
        assert env.read_text() == "SECRET_KEY=abc\n"

    def test_replaces_existing_assignment(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("DEBUG=1\nSECRET_KEY=old\nOTHER=x")

        write_env_value(env, "SECRET_KEY", "new")

        assert env.read_text() == "DEBUG=1\nSECRET_KEY=new\nOTHER=x"


class TestSecretCommand:
    def test_prints_key(self):
        result = CliRunner().invoke(cli, ["secret", "--format", "hex", "--length", "8"])

        assert result.exit_code == 0
        assert len(result.output.strip()) == 16

    def test_writes_env_file(self, tmp_path):
        env = tmp_path / ".env"
        result = CliRunner().invoke(cli, ["secret", "--write", str(env)])

        assert result.exit_code == 0
        assert f"SECRET_KEY written to {env}" in result.output
        assert env.read_text().startswith("SECRET_KEY=")


class TestSetRoleCommand:
    """``vidshare users set-role`` against the test database."""

    def test_promotes_user(self, settings, alice):
        with patch("vidshare.config.get_settings", return_value=settings):
            result = CliRunner().invoke(cli, ["users", "set-role", "alice", "admin"])

        assert result.exit_code == 0, result.output
        assert "alice is now admin" in result.output

    def test_unknown_user(self, settings, alice):
        with patch("vidshare.config.get_settings", return_value=settings):
            result = CliRunner().invoke(cli, ["users", "set-role", "nobody", "admin"])

        assert result.exit_code == 1
        assert "User does not exist" in result.output

    def test_unknown_role(self, settings, alice):
        with patch("vidshare.config.get_settings", return_value=settings):
            result = CliRunner().invoke(cli, ["users", "set-role", "alice", "owner"])

        assert result.exit_code == 1
        assert "Unknown role 'owner'" in result.output
