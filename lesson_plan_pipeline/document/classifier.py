"""블록 분류기 — Markdown 한 줄이 어떤 블록이 되는지 결정한다.

판정 순서:
  1. 앞뒤가 `|`인 줄 → 표 행 (`---`를 포함하면 구분선으로 버림)
  2. 그 외의 줄은 누적 중인 표를 먼저 내보낸 뒤
     `# ` / `## ` / `### ` 제목, `* ` / `- ` 글머리, 빈 줄, 일반 문단 순으로 판정
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

SEPARATOR_PATTERN = re.compile(r"-{3,}")

# 어느 접두사도 다른 접두사로 시작하지 않으므로 순서 무관
HEADING_PREFIXES: tuple[tuple[str, int], ...] = (("# ", 1), ("## ", 2), ("### ", 3))
BULLET_PREFIXES: tuple[str, ...] = ("* ", "- ")


class LineKind(str, Enum):
    TABLE_ROW = "table_row"
    TABLE_SEPARATOR = "table_separator"
    HEADING = "heading"
    BULLET = "bullet"
    BLANK = "blank"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class LineAction:
    """분류 결과.

    content: 표 행이면 다듬은 줄 전체, 제목/글머리면 접두사 뒤 텍스트,
    문단이면 다듬지 않은 원래 줄.
    flush_table: 이 블록을 내보내기 전에 누적된 표를 먼저 내보내야 하는지.
    """

    kind: LineKind
    content: str = ""
    level: int = 0
    flush_table: bool = False

    @property
    def is_table(self) -> bool:
        return self.kind in (LineKind.TABLE_ROW, LineKind.TABLE_SEPARATOR)


def is_table_line(trimmed: str) -> bool:
    return trimmed.startswith("|") and trimmed.endswith("|")


def classify_line(line: str, in_table: bool = False) -> LineAction:
    """한 줄을 분류한다. in_table은 현재 표 행을 누적 중인지 여부."""
    trimmed = line.strip()

    if is_table_line(trimmed):
        if SEPARATOR_PATTERN.search(trimmed):
            return LineAction(LineKind.TABLE_SEPARATOR, trimmed)
        return LineAction(LineKind.TABLE_ROW, trimmed)

    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return LineAction(LineKind.HEADING, line[len(prefix):].strip(), level, in_table)

    if trimmed.startswith(BULLET_PREFIXES):
        return LineAction(LineKind.BULLET, trimmed[2:].strip(), flush_table=in_table)

    if not trimmed:
        return LineAction(LineKind.BLANK, flush_table=in_table)

    return LineAction(LineKind.PARAGRAPH, line, flush_table=in_table)
