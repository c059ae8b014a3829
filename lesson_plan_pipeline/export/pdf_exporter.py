"""PDF 내보내기 — 미리보기 HTML → Playwright 캡처(PNG) → A4 이미지 PDF.

캡처 이미지를 A4 세로 페이지 폭에 맞춰 축소/확대하고,
높이는 캡처 종횡비로 정한다. 한 페이지를 넘으면 여러 A4 페이지로 잘라 담는다.
"""

from __future__ import annotations

import logging
import tempfile
from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path

from PIL import Image

from ..config import PDF_CAPTURE_SCALE, PDF_DPI, PREVIEW_VIEWPORT_WIDTH
from ..preview.renderer import render_preview_page
from .base import ExportError, Exporter

logger = logging.getLogger(__name__)

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
MM_PER_INCH = 25.4


class PageRasterizer(ABC):
    """HTML 페이지 → PNG 비트맵 추상 인터페이스."""

    @abstractmethod
    def capture(self, html: str) -> bytes:
        """완성된 HTML 문자열을 렌더링하여 전체 페이지 PNG 바이트를 반환."""


class PlaywrightRasterizer(PageRasterizer):
    """Playwright (Chromium headless) 기반 캡처 구현체."""

    def __init__(self, viewport_width: int = PREVIEW_VIEWPORT_WIDTH, scale: int = PDF_CAPTURE_SCALE):
        self._viewport_width = viewport_width
        self._scale = scale

    def capture(self, html: str) -> bytes:
        from playwright.sync_api import sync_playwright

        with tempfile.TemporaryDirectory() as td:
            tmp_html = Path(td) / "preview.html"
            tmp_html.write_text(html, encoding="utf-8")

            with sync_playwright() as p:
                browser = p.chromium.launch(headless=True)
                try:
                    page = browser.new_page(
                        viewport={"width": self._viewport_width, "height": 1200},
                        device_scale_factor=self._scale,
                    )
                    page.goto(tmp_html.as_uri())
                    page.wait_for_load_state("networkidle")
                    png = page.screenshot(full_page=True, type="png")
                finally:
                    browser.close()

        logger.info(f"미리보기 캡처 완료: {len(png)} bytes")
        return png


# ── A4 배치 ──────────────────────────────────────────────────────────

def fit_to_page_width(capture_width: int, capture_height: int, page_width: float = A4_WIDTH_MM) -> float:
    """캡처를 페이지 폭에 맞췄을 때의 높이 (page_width와 같은 단위)."""
    if capture_width <= 0:
        raise ValueError(f"캡처 폭이 올바르지 않습니다: {capture_width}")
    return capture_height * page_width / capture_width


def page_size_px(dpi: int = PDF_DPI) -> tuple[int, int]:
    """A4 세로 페이지의 픽셀 크기."""
    return (
        round(A4_WIDTH_MM / MM_PER_INCH * dpi),
        round(A4_HEIGHT_MM / MM_PER_INCH * dpi),
    )


def paginate(capture: Image.Image, dpi: int = PDF_DPI) -> list[Image.Image]:
    """캡처 이미지를 페이지 폭에 맞추고 A4 높이 단위로 자른다. 마지막 페이지는 흰색으로 채운다."""
    page_w, page_h = page_size_px(dpi)
    scaled_h = max(1, round(fit_to_page_width(capture.width, capture.height, page_w)))
    scaled = capture.convert("RGB").resize((page_w, scaled_h), Image.Resampling.LANCZOS)

    pages = []
    for top in range(0, scaled_h, page_h):
        page = Image.new("RGB", (page_w, page_h), "white")
        page.paste(scaled.crop((0, top, page_w, min(top + page_h, scaled_h))), (0, 0))
        pages.append(page)
    return pages


def render_a4_pdf(png: bytes, dpi: int = PDF_DPI) -> bytes:
    """PNG 캡처 → A4 세로 이미지 PDF 바이트."""
    with Image.open(BytesIO(png)) as capture:
        pages = paginate(capture, dpi)

    buf = BytesIO()
    pages[0].save(buf, format="PDF", save_all=True, append_images=pages[1:], resolution=float(dpi))
    logger.info(f"PDF 생성 완료: {len(pages)}페이지")
    return buf.getvalue()


class PdfExporter(Exporter):
    """생성 결과 → 래스터 PDF 바이트."""

    extension = "pdf"
    media_type = "application/pdf"

    def __init__(self, rasterizer: PageRasterizer | None = None, dpi: int = PDF_DPI):
        self._rasterizer = rasterizer or PlaywrightRasterizer()
        self._dpi = dpi

    def export(self, result) -> bytes:
        try:
            html = render_preview_page(result.markdown, title=result.form.lesson_title)
            png = self._rasterizer.capture(html)
            return render_a4_pdf(png, self._dpi)
        except Exception as e:
            raise ExportError(f"PDF 변환 실패: {e}") from e
