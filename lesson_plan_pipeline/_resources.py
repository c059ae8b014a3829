"""HTML 템플릿 경로 관리 — 폼 페이지/미리보기 페이지의 단일 진입점.

우선순위:
  1. set_template_dir()로 명시 지정
  2. 환경변수 LESSON_PLAN_TEMPLATE_DIR
  3. importlib.resources (패키지 번들 리소스)
"""

from __future__ import annotations

import os
from importlib.resources import files
from pathlib import Path

_custom_template_dir: Path | None = None


def set_template_dir(path: Path | str | None) -> None:
    """커스텀 템플릿 디렉토리를 지정한다. None이면 기본값으로 되돌린다."""
    global _custom_template_dir
    _custom_template_dir = Path(path) if path is not None else None


def get_template_dir() -> Path:
    """템플릿 디렉토리 경로를 반환한다."""
    if _custom_template_dir is not None:
        return _custom_template_dir
    env = os.getenv("LESSON_PLAN_TEMPLATE_DIR")
    if env:
        return Path(env)
    return Path(str(files("lesson_plan_pipeline") / "templates"))


def load_template(name: str) -> str:
    """템플릿 HTML 파일을 문자열로 읽는다."""
    return (get_template_dir() / name).read_text(encoding="utf-8")
