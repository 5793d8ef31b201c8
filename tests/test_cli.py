"""
Tests for the CLI module.
"""

import json

import pytest
import respx

from putrecord.cli.main import app
from putrecord.templates import WORKFLOW_TEMPLATE

PDS = "https://pds.test"
SESSION = {"did": "did:plc:alice", "handle": "alice.test", "accessJwt": "token"}


@pytest.fixture
def pds():
    """Mocked PDS with session, getRecord, createRecord and putRecord routes."""
    with respx.mock(assert_all_called=False) as router:
        router.post(f"{PDS}/xrpc/com.atproto.server.createSession").respond(200, json=SESSION)
        router.get(f"{PDS}/xrpc/com.atproto.repo.getRecord").respond(
            200,
            json={
                "uri": "at://did:plc:alice/com.whtwnd.blog.entry/abc",
                "cid": "old",
                "value": {"title": "Custom Title", "visibility": "author"},
            },
        )
        router.post(f"{PDS}/xrpc/com.atproto.repo.createRecord").respond(
            200, json={"uri": "at://did:plc:alice/com.example.note/3kcreated", "cid": "cid-new"}
        )
        router.post(f"{PDS}/xrpc/com.atproto.repo.putRecord").respond(
            200, json={"uri": "at://did:plc:alice/com.whtwnd.blog.entry/abc", "cid": "cid-put"}
        )
        yield router


def sent_record(router, nsid):
    """Return the record body sent to an endpoint."""
    for call in router.calls:
        if call.request.url.path.endswith(nsid):
            return json.loads(call.request.content)["record"]
    return None


class TestCLIUpload:
    """Tests for the upload command."""

    def test_create_without_rkey(self, set_env, pds, capsys):
        """Test create mode prints the generated RKEY."""
        result = app(["upload"])
        out = capsys.readouterr().out

        assert result == 0
        assert "New record created successfully!" in out
        assert "RKEY: 3kcreated" in out
        assert "RKEY=3kcreated" in out
        assert sent_record(pds, "createRecord")["content"] == "Hello world"

    def test_default_command_uploads(self, set_env, pds, capsys):
        """Test running without a subcommand performs the upload."""
        result = app([])
        assert result == 0
        assert "URI: at://did:plc:alice/com.example.note/3kcreated" in capsys.readouterr().out

    def test_update_preserves_fields(self, set_env, pds, tmp_path, capsys):
        """Test an update keeps the custom title and visibility."""
        post = tmp_path / "post.md"
        post.write_text("# New Heading\n\nUpdated body")
        set_env(COLLECTION="com.whtwnd.blog.entry", RKEY="abc", FILE_PATH=str(post))

        result = app(["upload"])

        assert result == 0
        assert "updated successfully" in capsys.readouterr().out
        record = sent_record(pds, "putRecord")
        assert record["title"] == "Custom Title"
        assert record["visibility"] == "author"
        assert record["content"] == "# New Heading\n\nUpdated body"

    @pytest.mark.parametrize(
        "args, extra_env",
        [
            (["upload", "--force-fields"], {}),
            (["--force-fields"], {}),
            (["--force-fields", "upload"], {}),
            (["upload"], {"FORCE_FIELDS": "true"}),
        ],
    )
    def test_force_fields(self, set_env, pds, tmp_path, args, extra_env):
        """Test --force-fields and FORCE_FIELDS re-derive blog fields."""
        post = tmp_path / "post.md"
        post.write_text("# Forced New Title\n\nBody")
        set_env(COLLECTION="com.whtwnd.blog.entry", RKEY="abc", FILE_PATH=str(post), **extra_env)

        assert app(args) == 0

        record = sent_record(pds, "putRecord")
        assert record["title"] == "Forced New Title"
        assert record["visibility"] == "public"

    def test_json_output(self, set_env, pds, capsys):
        result = app(["upload", "--json"])
        data = json.loads(capsys.readouterr().out)

        assert result == 0
        assert data["mode"] == "create"
        assert data["rkey"] == "3kcreated"
        assert data["record"]["$type"] == "com.example.note"

    def test_quiet(self, set_env, pds, capsys):
        """Test quiet mode prints nothing on success."""
        assert app(["--quiet"]) == 0
        assert capsys.readouterr().out == ""

    def test_missing_config(self, clean_env, capsys):
        """Test a missing variable exits with an error."""
        result = app(["upload"])
        err = capsys.readouterr().err

        assert result == 1
        assert "Missing required environment variable: PDS_URL" in err

    def test_missing_file(self, set_env, tmp_path, capsys):
        set_env(FILE_PATH=str(tmp_path / "nope.txt"))
        result = app(["upload", "--quiet"])

        assert result == 1
        assert "Failed to read file" in capsys.readouterr().err

    def test_authentication_failure(self, set_env, capsys):
        with respx.mock() as router:
            router.post(f"{PDS}/xrpc/com.atproto.server.createSession").respond(
                401, json={"error": "AuthenticationRequired", "message": "Invalid identifier or password"}
            )
            result = app(["upload"])

        assert result == 1
        assert "Authentication failed" in capsys.readouterr().err


class TestCLIInit:
    """Tests for the init command."""

    def test_init_creates_files(self, tmp_path, capsys):
        result = app(["init", str(tmp_path)])
        out = capsys.readouterr().out

        assert result == 0
        assert "Created directory: .github/workflows" in out
        assert "Created: .github/workflows/putrecord.yaml" in out
        assert "Created: .env.example" in out
        assert "Initialization complete!" in out
        assert "Next steps:" in out
        assert "Copy .env.example to .env" in out
        assert "Set GitHub repository secrets" in out
        assert (tmp_path / ".github/workflows/putrecord.yaml").read_text() == WORKFLOW_TEMPLATE

    def test_init_skips_existing(self, tmp_path, capsys):
        app(["init", str(tmp_path)])
        capsys.readouterr()

        result = app(["init", str(tmp_path)])
        out = capsys.readouterr().out

        assert result == 0
        assert "Skipped: .github/workflows/putrecord.yaml (already exists)" in out
        assert "Skipped: .env.example (already exists)" in out
        assert "Use --force to overwrite" in out

    def test_init_force(self, tmp_path, capsys):
        app(["init", str(tmp_path)])
        (tmp_path / ".github/workflows/putrecord.yaml").write_text("modified content")
        capsys.readouterr()

        result = app(["init", "--force", str(tmp_path)])
        out = capsys.readouterr().out

        assert result == 0
        assert "Created: .github/workflows/putrecord.yaml (overwritten)" in out
        assert "Created: .env.example (overwritten)" in out
        assert (tmp_path / ".github/workflows/putrecord.yaml").read_text() == WORKFLOW_TEMPLATE

    def test_init_default_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert app(["init"]) == 0
        assert (tmp_path / ".env.example").is_file()

    @pytest.mark.parametrize("args", [["init", "--quiet"], ["--quiet", "init"], ["init", "-q"]])
    def test_init_quiet(self, tmp_path, capsys, args):
        result = app([*args, str(tmp_path)])
        out = capsys.readouterr().out

        assert result == 0
        assert "Initializing putrecord project" not in out
        assert out == ""


class TestCLIHelp:
    """Tests for CLI help."""

    def test_help_returns_zero(self):
        assert app(["--help"]) == 0

    def test_command_help(self):
        assert app(["upload", "--help"]) == 0
        assert app(["init", "--help"]) == 0

    def test_version(self, capsys):
        assert app(["--version"]) == 0
        assert "putrecord, version 0.1.0" in capsys.readouterr().out
