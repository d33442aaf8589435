"""Tests for the content extractor."""

import pytest

from app.services.extractor import (
    decode_best_effort,
    extract_content,
    extract_file_content,
    fallback_message,
    file_extension,
    plain_text,
    readable_chars,
)


BINARY = bytes([0x00, 0x01, 0x02, 0xFF, 0xFE, 0x80, 0x81, 0x1B]) * 64


class TestExtractContent:
    """SUT: extract_content"""

    def test_plain_text_is_returned_as_is(self):
        """UTF-8 'Hello world' in a .txt comes back exactly."""
        assert extract_content(b"Hello world", "a.txt") == "Hello world"

    def test_text_formats_keep_their_layout(self):
        """Should not collapse whitespace for text formats."""
        csv = b"name,price\nwidget,10\n"
        assert extract_content(csv, "prices.CSV") == "name,price\nwidget,10\n"

    def test_binary_without_printable_runs_gives_diagnostic(self):
        """Should fall back to the fixed message naming the file."""
        result = extract_content(BINARY, "a.bin")
        assert result == fallback_message("a.bin")
        assert "a.bin" in result

    def test_empty_text_file_gives_diagnostic(self):
        """Whitespace-only text files are not accepted."""
        assert extract_content(b"   \n  ", "empty.txt") == fallback_message("empty.txt")

    def test_unknown_extension_with_readable_text(self):
        """Should strip non-printables and collapse whitespace."""
        data = b"\x00\x01Opening hours:\n\n  Monday to Friday 9-17\x02"
        assert extract_content(data, "notes.dat") == "Opening hours: Monday to Friday 9-17"

    def test_short_readable_text_is_not_enough(self):
        """Readable text of 20 chars or less is rejected."""
        assert extract_content(b"\x00tiny text\x00", "x.bin") == fallback_message("x.bin")

    def test_broken_pdf_uses_printable_runs(self):
        """A PDF the parser can't read still yields its printable ASCII runs."""
        data = (
            b"%PDF-1.4\n\x00\x01\x02 BT /F1 12 Tf (Hello from the quarterly report) Tj ET \x00\xff"
        )
        result = extract_content(data, "report.pdf")
        assert "Hello from the quarterly report" in result
        assert "\x00" not in result

    def test_failing_strategy_is_skipped(self):
        """A strategy that raises must not break the chain."""
        def boom(_src):
            raise RuntimeError("parser crashed")

        result = extract_content(b"Hello world", "a.txt", strategies=[("boom", boom), ("plain_text", plain_text)])
        assert result == "Hello world"

    def test_all_strategies_failing_gives_diagnostic(self):
        """Should never raise, even if every strategy does."""
        def boom(_src):
            raise RuntimeError("nope")

        assert extract_content(b"whatever", "f.txt", strategies=[("boom", boom)]) == fallback_message("f.txt")

    def test_readable_chars_on_latin1(self):
        """Latin-1 bytes decode without error and keep the ASCII part."""
        data = "Caf\xe9 menu: espresso, latte and more".encode("latin-1")
        assert extract_content(data, "menu", strategies=[("readable_chars", readable_chars)]) == (
            "Caf menu: espresso, latte and more"
        )


class TestDecoding:
    """SUT: decode_best_effort, file_extension"""

    def test_valid_utf8(self):
        assert decode_best_effort("héllo".encode("utf-8")) == "héllo"

    def test_invalid_utf8_falls_back_to_latin1(self):
        """Should re-decode garbled UTF-8 as Latin-1."""
        assert decode_best_effort(b"caf\xe9") == "caf\xe9"

    def test_control_chars_fall_back_to_latin1(self):
        assert decode_best_effort(b"\x00abc") == "\x00abc"

    @pytest.mark.parametrize(
        "name, ext",
        [("a.TXT", "txt"), ("archive.tar.gz", "gz"), ("README", ""), ("doc.pdf", "pdf")],
    )
    def test_file_extension(self, name, ext):
        assert file_extension(name) == ext


class TestExtractFileContent:
    """SUT: extract_file_content"""

    async def test_downloads_and_extracts(self, storage):
        storage.objects["/objects/faq"] = b"Q: Are you open on Sunday? A: No."
        text = await extract_file_content(storage, "/objects/faq", "faq.md")
        assert text == "Q: Are you open on Sunday? A: No."

    async def test_download_error_gives_distinct_diagnostic(self, storage):
        """Should include the file name and the error detail."""
        text = await extract_file_content(storage, "/objects/missing", "faq.md")
        assert text == "Failed to extract content from faq.md: Object not found: /objects/missing"
