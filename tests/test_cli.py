import json

import pytest
from typer.testing import CliRunner

from cli import main as cli_main
from conftest import FakeClient, fail

runner = CliRunner()

PASSWD = b"alice:x:1000:1000:Alice:/home/alice:/bin/bash\n"


@pytest.fixture
def client(monkeypatch):
    fake = FakeClient({"uname": b"Linux\n", "getent": PASSWD, "id": b"alice\n"})
    monkeypatch.setattr(cli_main, "LocalClient", lambda settings: fake)
    return fake


def test_keys_path(client):
    result = runner.invoke(cli_main.app, ["keys-path", "alice"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "/home/alice/.ssh"
    assert client.calls[0] == ("uname", "-s")


def test_os_override_skips_detection(client):
    result = runner.invoke(cli_main.app, ["--os", "freebsd", "keys-path", "alice"])

    assert result.exit_code == 0, result.output
    assert "uname" not in client.names


def test_unsupported_os_exits_with_error(client):
    result = runner.invoke(cli_main.app, ["--os", "windows", "keys-path", "alice"])

    assert result.exit_code == 1
    assert "unsupported OS" in result.output
    assert client.calls == []


def test_host_keys_exports_json(client, tmp_path):
    client.responses["ssh-keyscan"] = b"# h:22 SSH-2.0-OpenSSH\nh ssh-ed25519 AAAA\n"
    out = tmp_path / "scan.json"

    result = runner.invoke(cli_main.app, ["host-keys", "h", "--json", str(out)])

    assert result.exit_code == 0, result.output
    assert ("ssh-keyscan", "-p", "22", "h") in client.calls
    assert json.loads(out.read_text(encoding="utf-8"))["keys"] == ["h ssh-ed25519 AAAA"]


def test_copy_id_requires_exactly_one_key_source(client):
    result = runner.invoke(cli_main.app, ["copy-id", "alice"])
    assert result.exit_code != 0


def test_copy_id_reports_wrapped_errors(client):
    client.responses["test"] = fail("test", exit_code=1, stderr="")
    client.responses["mkdir"] = fail("mkdir", stderr="Permission denied")

    result = runner.invoke(cli_main.app, ["copy-id", "alice", "--key", "ssh-ed25519 AAAA"])

    assert result.exit_code == 1
    assert "error creating the SSH directory" in result.output


def test_copy_id_from_key_file(client, tmp_path):
    client.responses["test"] = fail("test", exit_code=1, stderr="")
    pub = tmp_path / "id_ed25519.pub"
    pub.write_text("ssh-ed25519 AAAA me@laptop\n", encoding="utf-8")

    result = runner.invoke(cli_main.app, ["copy-id", "alice", "--key-file", str(pub)])

    assert result.exit_code == 0, result.output
    assert client.calls[-1] == ("chmod", "600", "/home/alice/.ssh/authorized_keys")


def test_ssh_options_require_host(client):
    result = runner.invoke(cli_main.app, ["--ssh-user", "root", "detect-os"])
    assert result.exit_code != 0


def test_detect_os(client):
    result = runner.invoke(cli_main.app, ["detect-os"])
    assert result.exit_code == 0
    assert result.output.strip() == "linux"


def test_doctor_reports_missing_binaries(monkeypatch):
    from cli import doctor

    fake = FakeClient({"uname": b"Linux\n"})
    monkeypatch.setattr(doctor, "LocalClient", lambda settings: fake)
    monkeypatch.setattr(doctor.shutil, "which", lambda name: None if name == "ssh-keyscan" else "/usr/bin/ssh")

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "ssh-keyscan" in result.output


def test_host_keys_reports_unwritable_export_path(client, tmp_path):
    client.responses["ssh-keyscan"] = b"h ssh-ed25519 AAAA\n"
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")

    result = runner.invoke(cli_main.app, ["host-keys", "h", "--json", str(blocker / "scan.json")])

    assert result.exit_code == 1
    assert "error writing the scan" in result.output
    assert not isinstance(result.exception, OSError)
