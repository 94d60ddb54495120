"""Tests for reading, processing and writing a single file."""

from unittest.mock import patch

from tooltip_generator.generator import TooltipGenerator
from tooltip_generator.models import FileOutcome

SOURCE = (
    "using UnityEngine;\n"
    "public class Door : MonoBehaviour\n"
    "{\n"
    "    /// <summary>Seconds to open</summary>\n"
    "    public float openTime;\n"
    "}\n"
)

_real_open = open


def _deny_writes(path, mode="r", *args, **kwargs):
    if "w" in mode:
        raise PermissionError(13, "Permission denied", str(path))
    return _real_open(path, mode, *args, **kwargs)


class TestProcessFile:
    def test_updates_in_place(self, tmp_path):
        path = tmp_path / "Door.cs"
        path.write_text(SOURCE, encoding="utf-8")

        assert TooltipGenerator(newline="\n").process_file(str(path)) is True
        assert '    [Tooltip("Seconds to open")]\n' in path.read_text(encoding="utf-8")

    def test_writes_to_separate_output(self, tmp_path):
        src = tmp_path / "Door.cs"
        dst = tmp_path / "Door.out.cs"
        src.write_text(SOURCE, encoding="utf-8")

        assert TooltipGenerator(newline="\n").process_file(str(src), str(dst)) is True
        assert src.read_text(encoding="utf-8") == SOURCE
        assert "Seconds to open\")]" in dst.read_text(encoding="utf-8")

    def test_unchanged_file_not_written(self, tmp_path):
        src = tmp_path / "Door.cs"
        dst = tmp_path / "Door.out.cs"
        src.write_text("public class Door { }\n", encoding="utf-8")

        assert TooltipGenerator(newline="\n").process_file(str(src), str(dst)) is False
        assert not dst.exists()

    def test_crlf_preserved(self, tmp_path):
        path = tmp_path / "Door.cs"
        path.write_bytes(SOURCE.replace("\n", "\r\n").encode("utf-8"))

        assert TooltipGenerator(newline="\r\n").process_file(str(path)) is True
        data = path.read_bytes()
        assert b'    [Tooltip("Seconds to open")]\r\n    public float openTime;\r\n' in data
        assert b"\r\r\n" not in data

    def test_encoding_respected(self, tmp_path):
        path = tmp_path / "Door.cs"
        path.write_text(SOURCE.replace("Seconds to open", "Sekunden bis zum Öffnen"), encoding="latin-1")

        assert TooltipGenerator(newline="\n").process_file(str(path), encoding="latin-1") is True
        assert 'Tooltip("Sekunden bis zum Öffnen")' in path.read_text(encoding="latin-1")

    def test_missing_file_reports_false(self, tmp_path):
        assert TooltipGenerator().process_file(str(tmp_path / "missing.cs")) is False

    def test_undecodable_file_reports_false(self, tmp_path):
        path = tmp_path / "Binary.cs"
        path.write_bytes(b"\xff\xfe\xfa class")
        assert TooltipGenerator().process_file(str(path)) is False

    def test_write_permission_denied_reports_false(self, tmp_path):
        path = tmp_path / "Door.cs"
        path.write_text(SOURCE, encoding="utf-8")

        with patch("tooltip_generator.generator.open", side_effect=_deny_writes, create=True):
            assert TooltipGenerator(newline="\n").process_file(str(path)) is False
        assert path.read_text(encoding="utf-8") == SOURCE


class TestUpdateFile:
    def test_updated(self, tmp_path):
        path = tmp_path / "Door.cs"
        path.write_text(SOURCE, encoding="utf-8")
        assert TooltipGenerator(newline="\n").update_file(str(path)) is FileOutcome.UPDATED

    def test_unchanged(self, tmp_path):
        path = tmp_path / "Door.cs"
        path.write_text("public class Door { }\n", encoding="utf-8")
        assert TooltipGenerator(newline="\n").update_file(str(path)) is FileOutcome.UNCHANGED

    def test_missing_file_failed(self, tmp_path):
        outcome = TooltipGenerator().update_file(str(tmp_path / "missing.cs"))
        assert outcome is FileOutcome.FAILED

    def test_write_denied_failed(self, tmp_path):
        path = tmp_path / "Door.cs"
        path.write_text(SOURCE, encoding="utf-8")

        with patch("tooltip_generator.generator.open", side_effect=_deny_writes, create=True):
            outcome = TooltipGenerator(newline="\n").update_file(str(path))
        assert outcome is FileOutcome.FAILED
