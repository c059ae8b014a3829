"""공용 테스트 픽스처 — 외부 협력자(생성 서비스, 브라우저 캡처) 대역."""

from io import BytesIO

import pytest
from PIL import Image

from lesson_plan_pipeline.export.docx_exporter import DocxExporter
from lesson_plan_pipeline.export.pdf_exporter import PageRasterizer, PdfExporter
from lesson_plan_pipeline.gemini.client import GenerationClient, GenerationError
from lesson_plan_pipeline.lesson.models import ExportFormat, FormData
from lesson_plan_pipeline.pipeline.pipeline import DefaultLessonPlanPipeline

SAMPLE_MARKDOWN = """\
| Trường THCS Mẫu <br> Tổ Khoa học Tự nhiên | Họ và tên giáo viên: <br> Nguyễn Văn A |
| :--- | :--- |

# TÊN BÀI DẠY:
# THÔNG TIN, THU NHẬN VÀ XỬ LÝ THÔNG TIN
## Môn học: Tin học | Lớp: 6

**I. MỤC TIÊU**
**1. Về kiến thức:**
   - Biết **thông tin** là gì.
* Phân biệt thông tin với vật mang tin.

### **1. HOẠT ĐỘNG MỞ ĐẦU**
| Hoạt động của GV và HS | Nội dung/Sản phẩm dự kiến |
| :--- | :--- |
| **1. Giao nhiệm vụ học tập** <br> GV nêu câu hỏi | **Gợi ý đáp án:** <br> HS trả lời |
"""


class FakeGenerator(GenerationClient):
    """미리 정한 텍스트를 돌려주거나 예외를 내는 생성 서비스 대역."""

    def __init__(self, text: str = SAMPLE_MARKDOWN, error: Exception | None = None):
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


class FakeRasterizer(PageRasterizer):
    """브라우저 없이 고정 크기 PNG를 돌려주는 캡처 대역."""

    def __init__(self, size: tuple[int, int] = (450, 600)):
        self.size = size
        self.pages: list[str] = []

    def capture(self, html: str) -> bytes:
        self.pages.append(html)
        buf = BytesIO()
        Image.new("RGB", self.size, "white").save(buf, format="PNG")
        return buf.getvalue()


def make_form(**overrides) -> FormData:
    values = {
        "lop": "6",
        "ten_bai": "Thông tin, thu nhận và xử lý thông tin",
        "muc_tieu": "Biết thông tin là gì.\nNêu được ví dụ về vật mang tin.",
    }
    values.update(overrides)
    return FormData(**values)


@pytest.fixture
def form() -> FormData:
    return make_form()


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def pipeline(generator, rasterizer) -> DefaultLessonPlanPipeline:
    return DefaultLessonPlanPipeline(
        generator=generator,
        exporters={
            ExportFormat.DOCX: DocxExporter(),
            ExportFormat.PDF: PdfExporter(rasterizer=rasterizer),
        },
    )


@pytest.fixture
def failing_generator() -> FakeGenerator:
    return FakeGenerator(error=GenerationError("연결 실패"))
