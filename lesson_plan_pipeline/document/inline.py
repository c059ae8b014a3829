"""인라인 구간 파서 — 한 줄을 일반/굵게 run으로 나눈다."""

from __future__ import annotations

import re

from .models import InlineRun, Runs

BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")


def parse_inline(text: str) -> Runs:
    """`**...**`로 감싼 구간은 굵게, 나머지는 일반 run으로 반환한다.

    짝이 맞지 않는 `**`는 일반 텍스트로 남고, 빈 굵게 구간(`****`)은 버린다.
    일치하는 구간이 없으면 원문 전체가 하나의 일반 run이 된다.
    """
    runs: list[InlineRun] = []
    pos = 0
    for m in BOLD_PATTERN.finditer(text):
        if m.start() > pos:
            runs.append(InlineRun(text[pos:m.start()]))
        if m.group(1):
            runs.append(InlineRun(m.group(1), bold=True))
        pos = m.end()
    if pos < len(text):
        runs.append(InlineRun(text[pos:]))
    return tuple(runs)


def plain_text(runs: Runs) -> str:
    """run 목록의 표시 텍스트 (마크업 제거)."""
    return "".join(run.text for run in runs)


def to_markdown(runs: Runs) -> str:
    """굵게 run에 `**`를 다시 붙여 원문 줄을 복원한다."""
    return "".join(f"**{run.text}**" if run.bold else run.text for run in runs)
