"""교안 문서 트리 데이터 모델.

생성 서비스가 돌려준 Markdown을 블록 단위로 파싱한 결과를 표현한다.
Word 내보내기의 입력 인터페이스 역할. 한 번 생성되면 변경하지 않는다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass(frozen=True)
class InlineRun:
    """한 줄 안에서 같은 강조 상태를 갖는 연속 구간."""

    text: str
    bold: bool = False

    @property
    def kind(self) -> Literal["plain", "bold"]:
        return "bold" if self.bold else "plain"


Runs = tuple[InlineRun, ...]


@dataclass(frozen=True)
class TableCell:
    """표 셀 — <br>로 나뉜 줄마다 하나의 문단(run 묶음)."""

    paragraphs: tuple[Runs, ...] = ()


@dataclass(frozen=True)
class TableRow:
    cells: tuple[TableCell, ...] = ()


@dataclass(frozen=True)
class Heading:
    level: int  # 1 ~ 3
    runs: Runs = ()


@dataclass(frozen=True)
class Paragraph:
    runs: Runs = ()


@dataclass(frozen=True)
class BulletItem:
    runs: Runs = ()


@dataclass(frozen=True)
class Table:
    """연속된 표 행 묶음. 구분선(| --- |) 행은 포함하지 않는다."""

    rows: tuple[TableRow, ...] = ()


@dataclass(frozen=True)
class BlankLine:
    """빈 줄 — 내보내기에서 빈 문단으로 세로 간격을 유지한다."""


Block = Union[Heading, Paragraph, BulletItem, Table, BlankLine]


@dataclass(frozen=True)
class Document:
    """블록의 순서 있는 나열. 내보내기로 전달되는 유일한 산출물."""

    blocks: tuple[Block, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    @property
    def tables(self) -> list[Table]:
        return [b for b in self.blocks if isinstance(b, Table)]
