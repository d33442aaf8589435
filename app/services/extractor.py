# app/services/extractor.py
"""
Best-effort text extraction for uploaded training files.

Strategies are tried in order; each one either returns text it is happy
with or None. Whatever happens, `extract_content` returns a string.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import fitz  # PyMuPDF

log = logging.getLogger(__name__)

TEXT_EXTENSIONS = {"txt", "md", "csv", "json", "html", "xml"}
MIN_TEXT_CHARS = 20
BINARY_SNIFF_CHARS = 1000

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_PRINTABLE_RUN = re.compile(r"[\x20-\x7E][\x20-\x7E\s]*[\x20-\x7E]")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n\r\t]")
_WS = re.compile(r"\s+")


def collapse_ws(s: str) -> str:
    return _WS.sub(" ", s or "").strip()

def file_extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""

def looks_binary(text: str) -> bool:
    return "\ufffd" in text or bool(_CONTROL_CHARS.search(text[:BINARY_SNIFF_CHARS]))

def decode_best_effort(data: bytes) -> str:
    """UTF-8 first; if that looks garbled, fall back to Latin-1 (never fails)."""
    text = data.decode("utf-8", errors="replace")
    if looks_binary(text):
        text = data.decode("latin-1")
    return text


@dataclass
class ExtractionInput:
    data: bytes
    file_name: str
    extension: str = field(init=False)
    _decoded: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self.extension = file_extension(self.file_name)

    @property
    def decoded(self) -> str:
        if self._decoded is None:
            self._decoded = decode_best_effort(self.data)
        return self._decoded


# ====== Estrategias ======
def pdf_structured_text(src: ExtractionInput) -> Optional[str]:
    if src.extension != "pdf":
        return None
    with fitz.open(stream=src.data, filetype="pdf") as doc:
        text = " ".join(page.get_text() for page in doc)
    cleaned = collapse_ws(text)
    return cleaned if len(cleaned) > MIN_TEXT_CHARS else None

def plain_text(src: ExtractionInput) -> Optional[str]:
    if src.extension not in TEXT_EXTENSIONS:
        return None
    content = src.data.decode("utf-8", errors="replace")
    return content if content.strip() else None

def pdf_printable_runs(src: ExtractionInput) -> Optional[str]:
    if src.extension != "pdf":
        return None
    runs = [m for m in _PRINTABLE_RUN.findall(src.decoded) if len(m) > 3]
    text = collapse_ws(" ".join(runs))
    return text if len(text) > MIN_TEXT_CHARS else None

def readable_chars(src: ExtractionInput) -> Optional[str]:
    text = collapse_ws(_NON_PRINTABLE.sub("", src.decoded))
    return text if len(text) > MIN_TEXT_CHARS else None


Strategy = Callable[[ExtractionInput], Optional[str]]

STRATEGIES: List[Tuple[str, Strategy]] = [
    ("pdf_structured", pdf_structured_text),
    ("plain_text", plain_text),
    ("pdf_printable_runs", pdf_printable_runs),
    ("readable_chars", readable_chars),
]


def fallback_message(file_name: str) -> str:
    return (
        f"Content extracted from {file_name}. "
        "The file may require specialized processing for full text extraction."
    )

def download_failed_message(file_name: str, error: Exception) -> str:
    return f"Failed to extract content from {file_name}: {str(error) or type(error).__name__}"


def extract_content(data: bytes, file_name: str, strategies: Optional[List[Tuple[str, Strategy]]] = None) -> str:
    src = ExtractionInput(data=data, file_name=file_name)
    for name, strategy in (strategies or STRATEGIES):
        try:
            text = strategy(src)
        except Exception as e:
            log.warning(f"[EXTRACT] {name} falló para {file_name}: {e!r}")
            continue
        if text is not None:
            log.info(f"[EXTRACT] {file_name}: {name} ({len(text)} chars)")
            return text
    return fallback_message(file_name)


async def extract_file_content(storage, file_ref: str, file_name: str) -> str:
    """Download `file_ref` from object storage and extract its text."""
    try:
        data = await storage.download_bytes(file_ref)
    except Exception as e:
        log.error(f"[EXTRACT] Error descargando {file_name} ({file_ref}): {e!r}")
        return download_failed_message(file_name, e)
    return extract_content(data, file_name)
