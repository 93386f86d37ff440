from io import StringIO
import json
from unittest.mock import patch

import pytest
from google.auth.exceptions import DefaultCredentialsError

from cloudsec.cli import main
from cloudsec.output import OutputWriter


class Answers:
    def __init__(self, confirm=True):
        self._confirm = confirm

    def confirm(self, message, default=False):
        return self._confirm

    def secret(self, message):
        return "prompted"


@pytest.fixture
def run(config_file, backend):
    def invoke(*argv, prompter=None):
        out, err = StringIO(), StringIO()
        code = main(
            ["--config", str(config_file), *argv],
            writer=OutputWriter(out, err),
            prompter=prompter or Answers(),
        )
        return code, out.getvalue(), err.getvalue()
    return invoke


class TestScenario:
    def test_dev_lifecycle(self, run, backend):
        assert run("set", "FOO", "bar", "-e", "dev")[0] == 0
        assert json.loads(backend["store"]["dev-secrets"][-1]) == {"FOO": "bar"}

        code, out, _ = run("get", "FOO", "-e", "dev")
        assert (code, out) == (0, "bar\n")

        code, out, _ = run("env", "--export", "-e", "dev")
        assert (code, out) == (0, 'export FOO="bar"\n')

        assert run("delete", "FOO", "--force", "-e", "dev")[0] == 0
        assert json.loads(backend["store"]["dev-secrets"][-1]) == {}


class TestExitCodes:
    def test_missing_key(self, run):
        code, out, err = run("get", "NOPE")
        assert code == 1
        assert out == ""
        assert err == 'Error getting secret: Secret "NOPE" not found\n'

    def test_delete_missing_key_same_failure_as_get(self, run, backend):
        run("set", "A", "1")
        before = list(backend["store"]["dev-secrets"])
        code, _, err = run("rm", "B", "--force")
        assert code == 1
        assert 'Secret "B" not found' in err
        assert backend["store"]["dev-secrets"] == before

    def test_unknown_environment(self, run):
        code, _, err = run("list", "-e", "staging")
        assert code == 1
        assert "Environment 'staging' not found" in err

    def test_global_environment_flag(self, run, backend):
        assert run("-e", "prod", "set", "K", "v")[0] == 0
        assert "prod-secrets" in backend["store"]

    def test_subcommand_flag_wins(self, run, backend):
        assert run("-e", "prod", "set", "K", "v", "-e", "dev")[0] == 0
        assert "dev-secrets" in backend["store"]
        assert "prod-secrets" not in backend["store"]

    def test_aws_not_implemented(self, run):
        code, _, err = run("ls", "-e", "legacy")
        assert code == 1
        assert "AWS provider support is not yet implemented" in err

    def test_connection_failure(self, run, backend):
        backend["connected"] = False
        code, _, err = run("list")
        assert code == 1
        assert err.startswith("Error listing secrets: Failed to connect")

    def test_corrupt_blob(self, run, backend):
        backend["store"]["dev-secrets"] = ["not json"]
        code, _, err = run("list")
        assert code == 1
        assert "does not contain valid JSON" in err

    def test_missing_config(self, tmp_path, backend):
        err = StringIO()
        code = main(
            ["--config", str(tmp_path / "none.yaml"), "list"],
            writer=OutputWriter(StringIO(), err),
        )
        assert code == 1
        assert "Configuration file not found" in err.getvalue()

    def test_no_default_credentials(self, config_file):
        err = StringIO()
        with patch("cloudsec.gcp.provider.secretmanager_v1") as mock_sm:
            mock_sm.SecretManagerServiceClient.side_effect = DefaultCredentialsError("no adc")
            code = main(
                ["--config", str(config_file), "list"],
                writer=OutputWriter(StringIO(), err),
            )
        assert code == 1
        assert err.getvalue() == (
            "Error listing secrets: Failed to initialize GCP Secret Manager client: no adc\n"
        )

    def test_cancelled_delete_exits_zero(self, run, backend):
        run("set", "A", "1")
        code, out, _ = run("delete", "A", prompter=Answers(confirm=False))
        assert code == 0
        assert "Operation cancelled" in out

    def test_interrupted_prompt(self, run):
        class Interrupted(Answers):
            def secret(self, message):
                raise KeyboardInterrupt

        code, _, err = run("set", "A", prompter=Interrupted())
        assert code == 1
        assert "Operation cancelled" in err

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: cloudsec" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "cloudsec 1.0.0" in capsys.readouterr().out


class TestCommands:
    def test_download_alias_with_option(self, run, backend, tmp_path):
        run("set", "A", "1")
        target = tmp_path / "pulled.json"
        code, out, _ = run("pull", "-o", str(target))
        assert code == 0
        assert json.loads(target.read_text()) == {"A": "1"}

    def test_import(self, run, backend, tmp_path):
        path = tmp_path / "in.json"
        path.write_text('{"X": "1", "Y": "2"}')
        code, out, _ = run("import", str(path), "--force")
        assert code == 0
        assert json.loads(backend["store"]["dev-secrets"][-1]) == {"X": "1", "Y": "2"}

    def test_import_invalid(self, run, tmp_path):
        path = tmp_path / "in.json"
        path.write_text("[]")
        code, _, err = run("import", str(path))
        assert code == 1
        assert err.startswith("Error importing secrets: JSON file must contain an object")

    def test_project_override(self, run, backend):
        run("-p", "override-project", "set", "A", "1")
        assert backend["providers"][-1].get_environment().project_id == "override-project"

    def test_config_show(self, run):
        code, out, _ = run("config")
        assert code == 0
        assert "projectId: dev-project" in out

    def test_init_refuses_existing(self, run):
        code, out, _ = run("init")
        assert code == 0
        assert "already exists" in out
