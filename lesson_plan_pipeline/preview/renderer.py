"""미리보기 렌더러 — 생성된 Markdown → 안전한 HTML.

화면 미리보기와 PDF 래스터화 전용. Word 내보내기에는 쓰지 않는다.
생성 텍스트 안의 원시 HTML은 모두 이스케이프하고, 셀 줄바꿈 표시 <br>만 되살린다.
"""

from __future__ import annotations

import re

import markdown

from .._resources import load_template

_BR_ESCAPED = re.compile(r"&lt;br\s*/?&gt;", re.IGNORECASE)


def _esc(text: str) -> str:
    """HTML 이스케이프 (기본적인 XSS 방지)."""
    return (
        text
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def sanitize_markdown(text: str) -> str:
    """Markdown 원문의 HTML을 무력화한다. <br> 계열만 허용."""
    return _BR_ESCAPED.sub("<br>", _esc(text))


def render_preview_html(text: str) -> str:
    """Markdown → HTML 조각 (표 확장 사용)."""
    return markdown.markdown(sanitize_markdown(text), extensions=["tables"])


def render_preview_page(text: str, title: str = "Giáo án") -> str:
    """미리보기 HTML 조각을 스타일이 포함된 완전한 페이지로 감싼다 (PDF 캡처용)."""
    template = load_template("preview.html")
    template = template.replace("{{TITLE}}", _esc(title))
    return template.replace("{{CONTENT}}", render_preview_html(text))
