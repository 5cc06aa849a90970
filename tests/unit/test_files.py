"""Tests for reading and atomically replacing files."""

import os
import stat

import pytest

from trivialmerge.files import read_text, replace_atomically


def test_read_text_keeps_crlf(tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"a\r\nb\r\n")

    assert read_text(path) == "a\r\nb\r\n"


def test_replace_writes_content_verbatim(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("old\n")

    replace_atomically(path, "new\r\nlines\n")

    assert path.read_bytes() == b"new\r\nlines\n"
    assert os.listdir(tmp_path) == ["f.txt"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_replace_keeps_mode(tmp_path):
    path = tmp_path / "script.sh"
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)

    replace_atomically(path, "#!/bin/sh\necho hi\n")

    assert stat.S_IMODE(path.stat().st_mode) == 0o755


def test_replace_failure_leaves_original(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("original\n")

    with pytest.raises(UnicodeEncodeError):
        replace_atomically(path, "snowman ☃\n", encoding="ascii")

    assert path.read_text() == "original\n"
    assert os.listdir(tmp_path) == ["f.txt"]
