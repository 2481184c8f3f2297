"""Local known_hosts file updates from a host key scan."""

from __future__ import annotations

import os
from pathlib import Path

from core.domain.models import HostKeyScan

DEFAULT_KNOWN_HOSTS = Path.home() / ".ssh" / "known_hosts"


def append_known_hosts(*, scan: HostKeyScan, path: Path = DEFAULT_KNOWN_HOSTS) -> int:
    """Append the scanned key lines that `path` does not already contain.

    `ssh-keyscan` already writes `[host]:port` for non-default ports, so lines
    are stored verbatim. Returns the number of lines written.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    existing: set[str] = set()
    created = not path.exists()
    if not created:
        existing = {line.strip() for line in path.read_text(encoding="utf-8").splitlines()}

    new_lines = [line for line in scan.keys if line.strip() and line.strip() not in existing]
    if not new_lines:
        return 0

    prefix = ""
    if not created:
        content = path.read_bytes()
        if content and not content.endswith(b"\n"):
            prefix = "\n"

    with path.open("a", encoding="utf-8") as fh:
        fh.write(prefix + "\n".join(new_lines) + "\n")
    if created:
        os.chmod(path, 0o600)
    return len(new_lines)
