"""Word(.docx) 내보내기 — Document 블록 → python-docx 문서.

블록 매핑:
  Heading(1~3) → Heading 1~3 스타일 (레벨별 위/아래 간격, 1단계는 가운데 정렬)
  Paragraph    → Normal 문단
  BulletItem   → List Bullet (단일 레벨)
  Table        → Table Grid, 페이지 폭 100% 표 (셀 내 여러 문단 지원)
  BlankLine    → 빈 문단
"""

from __future__ import annotations

import logging
from io import BytesIO

import docx
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Pt
from lxml import etree

from ..document.models import BlankLine, BulletItem, Document, Heading, Paragraph, Runs, Table
from .base import ExportError, Exporter

logger = logging.getLogger(__name__)

# 레벨 → (위 간격, 아래 간격) pt
HEADING_SPACING: dict[int, tuple[float, float]] = {
    1: (15, 7.5),
    2: (12, 6),
    3: (10, 5),
}

# w:tblW pct 단위는 1/50 % → 5000 = 100 %
_FULL_WIDTH_PCT = "5000"


def _add_runs(paragraph, runs: Runs) -> None:
    for run in runs:
        r = paragraph.add_run(run.text)
        if run.bold:
            r.bold = True


def _set_full_width(table) -> None:
    """표 너비를 페이지 폭 100%로 지정한다 (w:tblW type=pct)."""
    tbl_pr = table._tbl.tblPr
    tbl_w = tbl_pr.find(qn("w:tblW"))
    if tbl_w is None:
        tbl_w = etree.SubElement(tbl_pr, qn("w:tblW"))
    tbl_w.set(qn("w:type"), "pct")
    tbl_w.set(qn("w:w"), _FULL_WIDTH_PCT)


class DocxWriter:
    """Document → python-docx 문서 객체. 블록 순서를 그대로 유지한다."""

    def write(self, document: Document):
        doc = docx.Document()
        for block in document.blocks:
            if isinstance(block, Heading):
                self._add_heading(doc, block)
            elif isinstance(block, BulletItem):
                _add_runs(doc.add_paragraph(style="List Bullet"), block.runs)
            elif isinstance(block, Table):
                self._add_table(doc, block)
            elif isinstance(block, BlankLine):
                doc.add_paragraph()
            elif isinstance(block, Paragraph):
                _add_runs(doc.add_paragraph(), block.runs)
        return doc

    def _add_heading(self, doc, block: Heading) -> None:
        p = doc.add_heading(level=block.level)
        _add_runs(p, block.runs)
        before, after = HEADING_SPACING[block.level]
        p.paragraph_format.space_before = Pt(before)
        p.paragraph_format.space_after = Pt(after)
        if block.level == 1:
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _add_table(self, doc, block: Table) -> None:
        n_cols = max(len(row.cells) for row in block.rows)
        table = doc.add_table(rows=len(block.rows), cols=n_cols)
        table.style = "Table Grid"
        _set_full_width(table)

        # 셀 수가 모자란 행은 빈 셀로 남는다
        for r, row in enumerate(block.rows):
            for c, cell in enumerate(row.cells):
                target = table.cell(r, c)
                for i, runs in enumerate(cell.paragraphs):
                    p = target.paragraphs[0] if i == 0 else target.add_paragraph()
                    _add_runs(p, runs)


class DocxExporter(Exporter):
    """생성 결과 → .docx 바이트."""

    extension = "docx"
    media_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    def __init__(self, writer: DocxWriter | None = None):
        self._writer = writer or DocxWriter()

    def export(self, result) -> bytes:
        try:
            doc = self._writer.write(result.document)
            buf = BytesIO()
            doc.save(buf)
        except Exception as e:
            raise ExportError(f"Word 변환 실패: {e}") from e
        logger.info(f"Word 변환 완료: 블록 {len(result.document)}개, {buf.tell()} bytes")
        return buf.getvalue()
