# polyfield_track/encoding.py
from __future__ import annotations

import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from charset_normalizer import from_bytes

from polyfield_track.logging_util import AppLogger

SAMPLE_SIZE = 512

_log = AppLogger()

Detector = Callable[[bytes], Optional[str]]

# only the code pages the decoders below handle are candidates
CANDIDATE_CODECS = ["ascii", "utf_8", "cp1252", "latin_1", "utf_16", "utf_16_le", "utf_16_be"]


def detect_charset(sample: bytes) -> Optional[str]:
    """Best-guess charset name for a byte sample (None if nothing fits)."""
    match = from_bytes(sample, cp_isolation=CANDIDATE_CODECS).best()
    if match is None:
        return None
    if match.encoding == "utf_8" and match.bom:
        return "utf-8-sig"
    return match.encoding


@dataclass(frozen=True)
class TextDecoder:
    """
    Turns the raw bytes of an export into text.
    codec=None is the passthrough: bytes are treated as already valid (UTF-8) text.
    """
    name: str
    codec: Optional[str] = None
    strip_bom: bool = False

    @property
    def is_passthrough(self) -> bool:
        return self.codec is None

    def decode(self, data: bytes) -> str:
        if self.codec is None:
            return data.decode("utf-8", errors="replace")
        text = codecs.decode(data, self.codec, errors="replace")
        if self.strip_bom and text.startswith("\ufeff"):
            text = text[1:]
        return text


PASSTHROUGH = TextDecoder("passthrough")
_CP1252 = TextDecoder("windows-1252", "cp1252")
_LATIN_1 = TextDecoder("iso-8859-1", "latin-1")
_UTF16_LE = TextDecoder("utf-16le", "utf-16-le", strip_bom=True)
_UTF16_BE = TextDecoder("utf-16be", "utf-16-be", strip_bom=True)

_DECODERS = {
    "utf-8": PASSTHROUGH,
    "ascii": PASSTHROUGH,
    "utf-8-sig": TextDecoder("utf-8-sig", "utf-8-sig"),
    "windows-1252": _CP1252,
    "cp1252": _CP1252,
    "iso-8859-1": _LATIN_1,
    "latin-1": _LATIN_1,
    "utf-16le": _UTF16_LE,
    "utf-16-le": _UTF16_LE,
    "utf-16be": _UTF16_BE,
    "utf-16-be": _UTF16_BE,
    # BOM present: the codec reads endianness from it and drops it
    "utf-16": TextDecoder("utf-16", "utf-16"),
}


def decoder_for_charset(charset: Optional[str]) -> TextDecoder:
    if not charset:
        return PASSTHROUGH
    decoder = _DECODERS.get(charset.strip().lower().replace("_", "-"))
    if decoder is None:
        _log.info(f"Charset {charset} not explicitly handled, defaulting to no transformation")
        return PASSTHROUGH
    return decoder


def select_decoder(stream: BinaryIO, detect: Detector = detect_charset) -> TextDecoder:
    """
    Sniff the first SAMPLE_SIZE bytes of `stream` and pick a decoder.
    The stream is rewound to its start afterwards. Detection problems never
    abort a parse: they fall back to the passthrough decoder.
    """
    sample = stream.read(SAMPLE_SIZE)
    stream.seek(0)

    try:
        charset = detect(sample)
    except Exception as e:
        _log.warn(f"Error detecting charset, defaulting to no transformation: {type(e).__name__}: {e}")
        return PASSTHROUGH

    _log.debug(f"Detected charset: {charset}")
    return decoder_for_charset(charset)


def read_text(path: Path, detect: Detector = detect_charset) -> str:
    with Path(path).open("rb") as f:
        decoder = select_decoder(f, detect)
        return decoder.decode(f.read())
