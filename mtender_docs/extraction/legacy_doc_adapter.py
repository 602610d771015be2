"""Text extraction for binary Word 97-2003 (``.doc``) files.

The document text lives in the ``WordDocument`` stream of an OLE2 container.
Its layout is described by the piece table (CLX) stored in the ``0Table`` or
``1Table`` stream; the File Information Block at the start of ``WordDocument``
says which table stream is in use and where the CLX is.

Each piece covers a run of character positions and points either at 8-bit
cp1252 text ("compressed") or at UTF-16LE text inside ``WordDocument``.
"""

import io
import struct

import olefile

from mtender_docs.documents.exceptions import DocumentExtractionError
from mtender_docs.extraction.base import BaseTextExtractor

WORD_IDENT = 0xA5EC

FIB_FLAGS_OFFSET = 0x000A
FIB_CCP_TEXT_OFFSET = 0x004C
FIB_CLX_OFFSET = 0x01A2

FLAG_ENCRYPTED = 0x0100
FLAG_WHICH_TABLE = 0x0200

CLX_PRC = 0x01
CLX_PCDT = 0x02
PCD_SIZE = 8
FC_COMPRESSED = 0x40000000

FIELD_BEGIN = "\x13"
FIELD_SEPARATOR = "\x14"
FIELD_END = "\x15"

# Word control characters mapped to plain text; other C0 controls are dropped.
_CONTROL_CHARS: dict[int, str | None] = {code: None for code in range(32) if code not in (9, 10)}
_CONTROL_CHARS.update(
    {
        ord("\r"): "\n",  # paragraph mark
        0x0B: "\n",  # manual line break
        0x0C: "\n",  # page or section break
        0x07: "\t",  # table cell or row end
        0x1E: "-",  # non-breaking hyphen
    }
)


class LegacyDocAdapter(BaseTextExtractor):
    """Extracts main-document text from Word 97-2003 files via olefile."""

    def extract(self, data: bytes) -> str:
        try:
            with olefile.OleFileIO(io.BytesIO(data)) as ole:
                if not ole.exists("WordDocument"):
                    raise DocumentExtractionError("OLE container has no WordDocument stream")
                word_stream = ole.openstream("WordDocument").read()
                flags = self._read_fib_flags(word_stream)
                table_name = "1Table" if flags & FLAG_WHICH_TABLE else "0Table"
                if not ole.exists(table_name):
                    raise DocumentExtractionError(f"Missing {table_name} stream")
                table_stream = ole.openstream(table_name).read()
            text = self._read_text(word_stream, table_stream)
        except DocumentExtractionError:
            raise
        except Exception as exc:
            raise DocumentExtractionError(f"legacy Word extraction failed: {exc}") from exc
        return strip_fields(text).translate(_CONTROL_CHARS)

    def _read_fib_flags(self, word_stream: bytes) -> int:
        if len(word_stream) < FIB_CLX_OFFSET + 8:
            raise DocumentExtractionError("WordDocument stream is too short")
        ident, = struct.unpack_from("<H", word_stream, 0)
        if ident != WORD_IDENT:
            raise DocumentExtractionError(
                f"Unsupported Word format (identifier 0x{ident:04X}), expected Word 97 or later"
            )
        flags, = struct.unpack_from("<H", word_stream, FIB_FLAGS_OFFSET)
        if flags & FLAG_ENCRYPTED:
            raise DocumentExtractionError("Word document is encrypted")
        return flags

    def _read_text(self, word_stream: bytes, table_stream: bytes) -> str:
        ccp_text, = struct.unpack_from("<i", word_stream, FIB_CCP_TEXT_OFFSET)
        fc_clx, lcb_clx = struct.unpack_from("<II", word_stream, FIB_CLX_OFFSET)
        plc_pcd = self._find_piece_table(table_stream[fc_clx:fc_clx + lcb_clx])

        piece_count = (len(plc_pcd) - 4) // (4 + PCD_SIZE)
        if piece_count <= 0:
            raise DocumentExtractionError("Piece table is empty")
        positions = struct.unpack_from(f"<{piece_count + 1}i", plc_pcd, 0)
        descriptors_offset = 4 * (piece_count + 1)
        limit = ccp_text if ccp_text > 0 else positions[-1]

        parts: list[str] = []
        for index in range(piece_count):
            start, end = positions[index], positions[index + 1]
            if start >= limit:
                break
            char_count = min(end, limit) - start
            fc, = struct.unpack_from("<I", plc_pcd, descriptors_offset + index * PCD_SIZE + 2)
            parts.append(self._read_piece(word_stream, fc, char_count))
        return "".join(parts)

    def _find_piece_table(self, clx: bytes) -> bytes:
        position = 0
        while position < len(clx):
            marker = clx[position]
            if marker == CLX_PRC:
                size, = struct.unpack_from("<H", clx, position + 1)
                position += 3 + size
            elif marker == CLX_PCDT:
                size, = struct.unpack_from("<I", clx, position + 1)
                return clx[position + 5:position + 5 + size]
            else:
                raise DocumentExtractionError(f"Malformed piece table (marker 0x{marker:02X})")
        raise DocumentExtractionError("Piece table not found")

    def _read_piece(self, word_stream: bytes, fc: int, char_count: int) -> str:
        if fc & FC_COMPRESSED:
            offset = (fc & ~FC_COMPRESSED) // 2
            raw, encoding = word_stream[offset:offset + char_count], "cp1252"
        else:
            raw, encoding = word_stream[fc:fc + 2 * char_count], "utf-16-le"
        if len(raw) < (char_count if encoding == "cp1252" else 2 * char_count):
            raise DocumentExtractionError("Piece table points outside the WordDocument stream")
        return raw.decode(encoding, errors="replace")


def strip_fields(text: str) -> str:
    """Drop field instructions and keep field results.

    A field is ``BEGIN instruction [SEPARATOR result] END`` and may nest.
    """
    output: list[str] = []
    # one entry per open field: True while its instruction part is being read
    open_fields: list[bool] = []
    for char in text:
        if char == FIELD_BEGIN:
            open_fields.append(True)
        elif char == FIELD_SEPARATOR and open_fields:
            open_fields[-1] = False
        elif char == FIELD_END and open_fields:
            open_fields.pop()
        elif not any(open_fields):
            output.append(char)
    return "".join(output)
