"""표 누적기 — 연속된 표 행을 모았다가 하나의 Table 블록으로 내보낸다."""

from __future__ import annotations

import re
from typing import Optional

from .inline import parse_inline
from .models import Table, TableCell, TableRow

# 셀 내 줄바꿈 표시. 프롬프트는 <br>을 지시하지만 <br/>, <BR /> 변형도 받아준다.
LINE_BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)


def parse_row(line: str) -> TableRow:
    """`| a | b<br>c |` → TableRow. 셀마다 줄바꿈 단위로 문단을 나눈다."""
    trimmed = line.strip()
    inner = trimmed[1:-1] if len(trimmed) >= 2 else ""
    cells = []
    for raw_cell in inner.split("|"):
        parts = LINE_BREAK_PATTERN.split(raw_cell.strip())
        cells.append(TableCell(paragraphs=tuple(parse_inline(p.strip()) for p in parts)))
    return TableRow(cells=tuple(cells))


class TableAccumulator:
    """현재 연속 구간의 표 행 버퍼. build() 호출 하나에만 속한다."""

    def __init__(self):
        self._rows: list[TableRow] = []

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def active(self) -> bool:
        return bool(self._rows)

    def add_row(self, line: str) -> None:
        self._rows.append(parse_row(line))

    def flush(self) -> Optional[Table]:
        """누적된 행이 있으면 Table을 만들고 버퍼를 비운다. 없으면 None."""
        if not self._rows:
            return None
        table = Table(rows=tuple(self._rows))
        self._rows = []
        return table
