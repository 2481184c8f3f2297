"""Target OS families.

The family decides which commands are valid on a host. Keeping it in the
domain layer lets services, adapters and the CLI share one definition.
"""

from __future__ import annotations

from enum import Enum


class OSFamily(str, Enum):
    """Operating system families a target host can report."""

    LINUX = "linux"
    DARWIN = "darwin"
    FREEBSD = "freebsd"
    OPENBSD = "openbsd"
    NETBSD = "netbsd"
    SOLARIS = "solaris"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    def is_unix(self) -> bool:
        """True for every family that speaks POSIX shell tools."""

        return self not in (OSFamily.WINDOWS, OSFamily.UNKNOWN)

    @classmethod
    def from_uname(cls, text: str) -> "OSFamily":
        """Map `uname -s` output to a family."""

        name = (text or "").strip().lower()
        if name == "sunos":
            return cls.SOLARIS
        if name.startswith(("mingw", "msys", "cygwin", "windows")):
            return cls.WINDOWS
        for member in cls:
            if member.value == name:
                return member
        return cls.UNKNOWN

    def label(self) -> str:
        return self.value.capitalize() if self is not OSFamily.DARWIN else "macOS"
