"""문서 빌더 — 생성 결과 Markdown 전체를 블록 나열로 변환한다.

줄 순서대로 분류기에 넘기고, 표 행은 누적기로, 나머지는 바로 블록으로 만든다.
표가 아닌 줄이 나오거나 입력이 끝나면 누적된 표를 내보낸다.
상태는 호출마다 새로 만들므로 같은 입력은 항상 같은 Document가 된다.
잘못된 마크업에도 예외를 내지 않고, 알 수 없는 줄은 문단으로 처리한다.
"""

from __future__ import annotations

import logging
import re

from .classifier import LineAction, LineKind, classify_line
from .inline import parse_inline
from .models import BlankLine, Block, BulletItem, Document, Heading, Paragraph
from .table import TableAccumulator

logger = logging.getLogger(__name__)

# \n, \r\n만 줄 경계로 본다 (\x0c, U+2028 등은 줄 안의 문자로 남김)
NEWLINE_PATTERN = re.compile(r"\r?\n")


def _make_block(action: LineAction) -> Block:
    if action.kind is LineKind.HEADING:
        return Heading(level=action.level, runs=parse_inline(action.content))
    if action.kind is LineKind.BULLET:
        return BulletItem(runs=parse_inline(action.content))
    if action.kind is LineKind.BLANK:
        return BlankLine()
    return Paragraph(runs=parse_inline(action.content))


def split_lines(raw_text: str) -> list[str]:
    """줄바꿈 기준으로 나눈다. 마지막 줄바꿈 뒤의 빈 조각은 줄로 치지 않는다."""
    lines = NEWLINE_PATTERN.split(raw_text)
    if lines[-1] == "":
        lines.pop()
    return lines


def _flush(table: TableAccumulator, blocks: list[Block]) -> None:
    flushed = table.flush()
    if flushed is not None:
        blocks.append(flushed)


def build_document(raw_text: str) -> Document:
    """Markdown 텍스트 → Document."""
    blocks: list[Block] = []
    table = TableAccumulator()
    skipped = 0

    for line in split_lines(raw_text):
        action = classify_line(line, in_table=table.active)

        if action.kind is LineKind.TABLE_SEPARATOR:
            skipped += 1
            continue
        if action.kind is LineKind.TABLE_ROW:
            table.add_row(action.content)
            continue

        if action.flush_table:
            _flush(table, blocks)
        blocks.append(_make_block(action))

    _flush(table, blocks)

    logger.debug(f"문서 변환 완료: 블록 {len(blocks)}개, 구분선 {skipped}줄 제외")
    return Document(blocks=tuple(blocks))
