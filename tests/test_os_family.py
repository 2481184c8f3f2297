import pytest

from adapters.os_probe import detect_os_family
from conftest import FakeClient, fail
from core.domain.os_family import OSFamily


@pytest.mark.parametrize(
    "uname, expected",
    [
        ("Linux\n", OSFamily.LINUX),
        ("Darwin", OSFamily.DARWIN),
        ("FreeBSD", OSFamily.FREEBSD),
        ("SunOS", OSFamily.SOLARIS),
        ("MINGW64_NT-10.0", OSFamily.WINDOWS),
        ("Plan9", OSFamily.UNKNOWN),
        ("", OSFamily.UNKNOWN),
    ],
)
def test_from_uname(uname, expected):
    assert OSFamily.from_uname(uname) is expected


def test_is_unix():
    assert OSFamily.LINUX.is_unix()
    assert OSFamily.SOLARIS.is_unix()
    assert not OSFamily.WINDOWS.is_unix()
    assert not OSFamily.UNKNOWN.is_unix()


def test_detect_os_family_runs_uname():
    client = FakeClient({"uname": b"Linux\n"})
    assert detect_os_family(client) is OSFamily.LINUX
    assert client.calls == [("uname", "-s")]


def test_detect_os_family_without_uname_is_unknown():
    client = FakeClient({"uname": fail("uname", exit_code=None)})
    assert detect_os_family(client) is OSFamily.UNKNOWN
