import json
import stat
from pathlib import Path

from adapters.json_exporter import export_scan_json
from adapters.known_hosts import append_known_hosts
from core.domain.models import HostKeyScan

KEYS = [
    "[example.org]:2222 ssh-ed25519 AAAAed",
    "[example.org]:2222 ssh-rsa AAAArsa",
    "[example.org]:2222 ssh-ed25519 AAAAother",
]


def test_key_types_are_deduplicated_in_order():
    scan = HostKeyScan(host="example.org", port=2222, keys=KEYS)
    assert scan.key_types == ["ssh-ed25519", "ssh-rsa"]


def test_export_scan_json(tmp_path: Path):
    scan = HostKeyScan(host="example.org", port=2222, keys=KEYS)
    out = export_scan_json(scan=scan, output_path=tmp_path / "scans" / "example.json")

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["host"] == "example.org"
    assert data["keys"] == KEYS
    assert data["key_types"] == ["ssh-ed25519", "ssh-rsa"]
    assert "scanned_at" in data


def test_append_known_hosts_creates_private_file(tmp_path: Path):
    path = tmp_path / "ssh" / "known_hosts"
    scan = HostKeyScan(host="example.org", port=2222, keys=KEYS[:2])

    assert append_known_hosts(scan=scan, path=path) == 2
    assert path.read_text(encoding="utf-8").splitlines() == KEYS[:2]
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_append_known_hosts_skips_known_lines(tmp_path: Path):
    path = tmp_path / "known_hosts"
    path.write_text(KEYS[0], encoding="utf-8")  # no trailing newline

    added = append_known_hosts(scan=HostKeyScan(host="example.org", keys=KEYS), path=path)

    assert added == 2
    assert path.read_text(encoding="utf-8").splitlines() == KEYS
    assert append_known_hosts(scan=HostKeyScan(host="example.org", keys=KEYS), path=path) == 0
