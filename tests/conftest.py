import io
import struct

import pytest
from docx import Document
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

DOCUMENT_URL = "https://storage.mtender.gov.md/get/5b1d2c3e-7f8a-11ee-b962-0242ac120002-1700000000000"


@pytest.fixture()
def document_url() -> str:
    return DOCUMENT_URL


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Tender specification")
    c.drawString(72, 700, "Lot 1: office supplies")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Generate a DOCX with a heading, a paragraph and a 2x2 table."""
    document = Document()
    document.add_paragraph("Caiet de sarcini")
    document.add_paragraph("Termen de livrare: 30 zile")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Item"
    table.cell(0, 1).text = "Qty"
    table.cell(1, 0).text = "Paper"
    table.cell(1, 1).text = "100"
    document.add_paragraph("Semnătura")
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


OLE_SECTOR_SIZE = 512
OLE_MIN_FAT_STREAM_SIZE = 4096
OLE_FREE_SECTOR = 0xFFFFFFFF
OLE_END_OF_CHAIN = 0xFFFFFFFE
OLE_FAT_SECTOR = 0xFFFFFFFD
OLE_NO_STREAM = 0xFFFFFFFF


def _ole_directory_entry(
    name: str,
    entry_type: int,
    child: int = OLE_NO_STREAM,
    right: int = OLE_NO_STREAM,
    start: int = OLE_END_OF_CHAIN,
    size: int = 0,
) -> bytes:
    entry = bytearray(128)
    if name:
        encoded = name.encode("utf-16-le") + b"\x00\x00"
        entry[: len(encoded)] = encoded
        struct.pack_into("<HBB", entry, 0x40, len(encoded), entry_type, 1)
    struct.pack_into("<III", entry, 0x44, OLE_NO_STREAM, right, child)
    struct.pack_into("<IQ", entry, 0x74, start, size)
    return bytes(entry)


def build_ole_container(streams: dict[str, bytes]) -> bytes:
    """Write a version 3 compound file holding ``streams`` at the root.

    Sector 0 is the FAT, sector 1 the directory. Streams are padded to the
    mini-stream cutoff so every stream lives in regular sectors.
    """
    names = sorted(streams, key=lambda name: (len(name), name.upper()))
    fat = [OLE_FAT_SECTOR, OLE_END_OF_CHAIN]
    entries = [_ole_directory_entry("Root Entry", 5, child=1 if names else OLE_NO_STREAM)]
    body = bytearray()
    for index, name in enumerate(names):
        data = streams[name].ljust(OLE_MIN_FAT_STREAM_SIZE, b"\x00")
        size = len(data)
        data += b"\x00" * (-len(data) % OLE_SECTOR_SIZE)
        start = len(fat)
        fat.extend(range(start + 1, start + len(data) // OLE_SECTOR_SIZE))
        fat.append(OLE_END_OF_CHAIN)
        right = index + 2 if index + 1 < len(names) else OLE_NO_STREAM
        entries.append(_ole_directory_entry(name, 2, right=right, start=start, size=size))
        body += data
    assert len(fat) <= OLE_SECTOR_SIZE // 4 and len(entries) <= 4
    fat += [OLE_FREE_SECTOR] * (OLE_SECTOR_SIZE // 4 - len(fat))
    entries += [_ole_directory_entry("", 0)] * (4 - len(entries))

    header = bytearray(OLE_SECTOR_SIZE)
    header[:8] = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
    struct.pack_into("<HHHHH", header, 0x18, 0x3E, 3, 0xFFFE, 9, 6)
    struct.pack_into(
        "<9I", header, 0x28, 0, 1, 1, 0, OLE_MIN_FAT_STREAM_SIZE, OLE_END_OF_CHAIN, 0,
        OLE_END_OF_CHAIN, 0,
    )
    struct.pack_into("<109I", header, 0x4C, 0, *([OLE_FREE_SECTOR] * 108))
    return bytes(header) + struct.pack("<128I", *fat) + b"".join(entries) + bytes(body)


def build_word_streams(pieces: list[tuple[str, bool]]) -> dict[str, bytes]:
    """WordDocument and 1Table streams for text pieces given as (text, compressed)."""
    word = bytearray(0x400)
    struct.pack_into("<H", word, 0, 0xA5EC)
    struct.pack_into("<H", word, 0x0A, 0x0200)
    positions = [0]
    descriptors = b""
    for text, compressed in pieces:
        offset = len(word)
        if compressed:
            word.extend(text.encode("cp1252"))
            fc = (offset * 2) | 0x40000000
        else:
            word.extend(text.encode("utf-16-le"))
            fc = offset
        positions.append(positions[-1] + len(text))
        descriptors += struct.pack("<HIH", 0, fc, 0)
    plc_pcd = struct.pack(f"<{len(positions)}i", *positions) + descriptors
    clx = b"\x02" + struct.pack("<I", len(plc_pcd)) + plc_pcd
    struct.pack_into("<i", word, 0x4C, positions[-1])
    struct.pack_into("<II", word, 0x1A2, 0, len(clx))
    return {"WordDocument": bytes(word), "1Table": clx}


@pytest.fixture()
def sample_doc_bytes() -> bytes:
    """Generate a Word 97 file with a cp1252 piece, a UTF-16 piece, a field and a table row."""
    streams = build_word_streams(
        [
            ("Caiet de sarcini\r", True),
            (
                "Preț estimativ: 100 lei\r"
                '\x13 HYPERLINK "https://mtender.gov.md" \x14mtender.gov.md\x15\r'
                "Lot 1\x07Hârtie\x07\x07\r",
                False,
            ),
        ]
    )
    return build_ole_container(streams)
