"""SSH key operations on a target host.

Three procedures built on top of `core.services.fs_commands`:

- `get_host_keys`: run `ssh-keyscan` and return the key lines.
- `copy_id`: add a public key to a user's `authorized_keys`.
- `get_keys_path`: location of a user's `.ssh` directory.

Every failure is wrapped once with a one-line context (`OperationError`) and
raised immediately. Nothing is retried and nothing is rolled back: a failed
chown after a successful append leaves the file as it is.
"""

from __future__ import annotations

import logging
import posixpath

from core.domain.os_family import OSFamily
from core.errors import KeyOpsError, OperationError, UnsupportedOSError
from core.interfaces.client import Client
from core.services import fs_commands as fs

logger = logging.getLogger(__name__)

SSH_DIR_NAME = ".ssh"
AUTHORIZED_KEYS = "authorized_keys"
TMP_AUTHORIZED_KEYS = "drlm_core_authorized_keys"
SSH_DIR_MODE = 0o700
AUTHORIZED_KEYS_MODE = 0o600

_COMMENT_PREFIX = "# "


def _wrap(context: str, exc: KeyOpsError) -> OperationError:
    logger.warning("%s: %s", context, exc)
    return OperationError(context, exc)


def parse_keyscan_output(output: str) -> list[str]:
    """Drop `# host:port SSH-...` banner lines and keep the rest in order."""

    text = output.strip()
    if not text:
        return []
    return [
        line
        for line in text.split("\n")
        if not line.startswith(_COMMENT_PREFIX)
    ]


def get_host_keys(os_family: OSFamily, client: Client, host: str, port: int) -> list[str]:
    """Public SSH keys served by `host:port`, as seen from the client's machine."""

    if not os_family.is_unix():
        raise UnsupportedOSError(os_family)

    try:
        out = client.exec("ssh-keyscan", "-p", str(port), host)
    except KeyOpsError as exc:
        raise _wrap("error getting the host SSH keys", exc) from exc

    return parse_keyscan_output(out.decode("utf-8", errors="replace"))


def copy_id(os_family: OSFamily, client: Client, usr: str, key: bytes | str) -> None:
    """Append `key` to `usr`'s authorized_keys, creating `.ssh` if needed.

    The file is rebuilt in a temp path (copy, append) and moved into place,
    then owned by `usr:<primary group>` with mode 0600.
    """

    if not os_family.is_unix():
        raise UnsupportedOSError(os_family)

    try:
        home = fs.home(os_family, client, usr)
        grp = fs.user_group(os_family, client, usr)
    except KeyOpsError as exc:
        raise _wrap("error copying the SSH key", exc) from exc

    ssh_dir = posixpath.join(home, SSH_DIR_NAME)
    try:
        exists = fs.check_dir(os_family, client, ssh_dir)
    except KeyOpsError as exc:
        raise _wrap("error checking the SSH directory", exc) from exc

    if not exists:
        logger.info("creating %s for %s", ssh_dir, usr)
        try:
            fs.mkdir(os_family, client, ssh_dir)
        except KeyOpsError as exc:
            raise _wrap("error creating the SSH directory", exc) from exc
        try:
            fs.chown(os_family, client, ssh_dir, usr, grp)
        except KeyOpsError as exc:
            raise _wrap("error changing the SSH directory owner", exc) from exc
        try:
            fs.chmod(os_family, client, ssh_dir, SSH_DIR_MODE)
        except KeyOpsError as exc:
            raise _wrap("error changing the SSH directory permissions", exc) from exc

    auth_keys = posixpath.join(ssh_dir, AUTHORIZED_KEYS)
    tmp_auth_keys = posixpath.join(fs.temp_dir(os_family), TMP_AUTHORIZED_KEYS)

    try:
        exists = fs.check_file(os_family, client, auth_keys)
    except KeyOpsError as exc:
        raise _wrap("error checking for the authorized_keys file", exc) from exc

    if exists:
        try:
            fs.copy(os_family, client, auth_keys, tmp_auth_keys)
        except KeyOpsError as exc:
            raise _wrap("error copying the authorized_keys file", exc) from exc
    else:
        # The temp path is shared: never append to whatever a previous run left there.
        try:
            fs.truncate(os_family, client, tmp_auth_keys)
        except KeyOpsError as exc:
            raise _wrap("error clearing the temporary authorized_keys file", exc) from exc

    try:
        fs.append_to_file(os_family, client, tmp_auth_keys, key)
    except KeyOpsError as exc:
        raise _wrap("error adding the key to the authorized_keys file", exc) from exc

    try:
        fs.move(os_family, client, tmp_auth_keys, auth_keys)
    except KeyOpsError as exc:
        raise _wrap("error replacing the authorized_keys file", exc) from exc

    try:
        fs.chown(os_family, client, auth_keys, usr, grp)
    except KeyOpsError as exc:
        raise _wrap("error changing the authorized_keys owner", exc) from exc

    try:
        fs.chmod(os_family, client, auth_keys, AUTHORIZED_KEYS_MODE)
    except KeyOpsError as exc:
        raise _wrap("error changing the authorized_keys permissions", exc) from exc

    logger.info("key added to %s", auth_keys)


def get_keys_path(os_family: OSFamily, client: Client, usr: str) -> str:
    """`<home>/.ssh` for `usr`."""

    if not os_family.is_unix():
        raise UnsupportedOSError(os_family)

    try:
        home = fs.home(os_family, client, usr)
    except KeyOpsError as exc:
        raise _wrap("error getting the public key", exc) from exc

    return posixpath.join(home, SSH_DIR_NAME)
