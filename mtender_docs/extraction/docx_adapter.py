import io
from collections.abc import Sequence

from docx import Document
from docx.table import Table, _Cell
from docx.text.paragraph import Paragraph

from mtender_docs.documents.exceptions import DocumentExtractionError
from mtender_docs.extraction.base import BaseTextExtractor


class DocxAdapter(BaseTextExtractor):
    """Extracts raw text from Office Open XML Word documents with python-docx.

    Paragraphs and tables are emitted in body order, one block per paragraph
    and one line per table row with cells separated by tabs.
    """

    def extract(self, data: bytes) -> str:
        try:
            document = Document(io.BytesIO(data))
            blocks = [self._block_text(block) for block in document.iter_inner_content()]
        except Exception as exc:
            raise DocumentExtractionError(f"python-docx extraction failed: {exc}") from exc
        return "\n\n".join(blocks)

    def _block_text(self, block: Paragraph | Table) -> str:
        if isinstance(block, Paragraph):
            return block.text
        return "\n".join(self._row_text(row.cells) for row in block.rows)

    def _row_text(self, cells: Sequence[_Cell]) -> str:
        # merged cells are repeated once per grid column they span
        seen: list[object] = []
        texts: list[str] = []
        for cell in cells:
            if any(cell._tc is tc for tc in seen):
                continue
            seen.append(cell._tc)
            texts.append(cell.text)
        return "\t".join(texts)
