"""Tests for binary sniffing and line/character counting."""

from workpulse.scanning import text_metrics
from workpulse.scanning.text_metrics import FileKind, classify, measure


def _write(tmp_path, name, data: bytes):
    path = tmp_path / name
    path.write_bytes(data)
    return path


class TestMeasure:
    def test_empty_file(self, tmp_path):
        m = measure(_write(tmp_path, "empty.txt", b""))
        assert (m.lines, m.chars) == (0, 0)

    def test_single_newline_is_one_line(self, tmp_path):
        m = measure(_write(tmp_path, "nl.txt", b"\n"))
        assert (m.lines, m.chars) == (1, 1)

    def test_trailing_partial_line_counts(self, tmp_path):
        m = measure(_write(tmp_path, "a.txt", b"one\ntwo"))
        assert m.lines == 2
        assert m.chars == 7

    def test_terminated_last_line_not_double_counted(self, tmp_path):
        m = measure(_write(tmp_path, "a.txt", b"one\ntwo\n"))
        assert m.lines == 2

    def test_crlf_is_one_terminator(self, tmp_path):
        m = measure(_write(tmp_path, "win.txt", b"a\r\nb\r\n"))
        assert m.lines == 2
        assert m.chars == 6

    def test_lone_cr_terminates(self, tmp_path):
        m = measure(_write(tmp_path, "mac.txt", b"a\rb\rc"))
        assert m.lines == 3

    def test_crlf_split_across_chunks(self, tmp_path, monkeypatch):
        monkeypatch.setattr(text_metrics, "CHUNK_CHARS", 2)
        # Chunks: "a\r" | "\nb" | "\r\n"
        m = measure(_write(tmp_path, "split.txt", b"a\r\nb\r\n"))
        assert m.lines == 2
        assert m.chars == 6

    def test_counts_decoded_characters_not_bytes(self, tmp_path):
        m = measure(_write(tmp_path, "utf8.txt", "héllo\n".encode("utf-8")))
        assert m.chars == 6

    def test_invalid_utf8_is_replaced(self, tmp_path):
        m = measure(_write(tmp_path, "latin1.txt", b"caf\xe9\n"))
        assert m.lines == 1
        assert m.chars == 5

    def test_measure_is_stable(self, tmp_path):
        path = _write(tmp_path, "a.txt", b"x\ny\r\nz")
        assert measure(path) == measure(path)

    def test_missing_file_returns_none(self, tmp_path):
        assert measure(tmp_path / "nope.txt") is None


class TestClassify:
    def test_text(self, tmp_path):
        assert classify(_write(tmp_path, "a.txt", b"plain text\n")) is FileKind.TEXT

    def test_null_byte_is_binary_whatever_the_extension(self, tmp_path):
        assert classify(_write(tmp_path, "looks.txt", b"abc\x00def")) is FileKind.BINARY

    def test_null_after_sniff_window_is_text(self, tmp_path):
        data = b"a" * text_metrics.SNIFF_BYTES + b"\x00"
        assert classify(_write(tmp_path, "late.bin", data)) is FileKind.TEXT

    def test_empty_file_is_text(self, tmp_path):
        assert classify(_write(tmp_path, "empty", b"")) is FileKind.TEXT

    def test_missing_file_is_unreadable(self, tmp_path):
        assert classify(tmp_path / "missing") is FileKind.UNREADABLE
