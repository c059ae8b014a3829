"""교안 파이프라인 테스트 — 제출/다운로드 흐름, 요청 슬롯, 알림 수명."""

import pytest

from lesson_plan_pipeline.document import build_document
from lesson_plan_pipeline.export.base import EXPORT_FAILED_MESSAGE, ExportError, Exporter
from lesson_plan_pipeline.gemini.client import GENERATION_FAILED_MESSAGE, GenerationError
from lesson_plan_pipeline.lesson.models import VALIDATION_MESSAGE, ExportFormat
from lesson_plan_pipeline.pipeline.models import (
    LessonPlanResult,
    NoResultError,
    Notice,
    RequestInFlightError,
    RequestSlot,
    RequestState,
)
from lesson_plan_pipeline.pipeline.pipeline import DefaultLessonPlanPipeline

from conftest import SAMPLE_MARKDOWN, FakeGenerator, make_form


class RecordingExporter(Exporter):
    extension = "docx"
    media_type = "application/test"

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.results = []

    def export(self, result) -> bytes:
        self.results.append(result)
        if self.error is not None:
            raise self.error
        return b"ok"


def _pipeline(generator=None, exporter=None) -> DefaultLessonPlanPipeline:
    return DefaultLessonPlanPipeline(
        generator=generator or FakeGenerator(),
        exporters={ExportFormat.DOCX: exporter or RecordingExporter()},
        notice_dismiss_sec=5.0,
    )


# ── 요청 슬롯 ──

def test_slot_transitions():
    slot = RequestSlot("generation")
    assert slot.state is RequestState.IDLE
    slot.begin()
    assert slot.busy
    with pytest.raises(RequestInFlightError):
        slot.begin()
    slot.finish(success=False)
    assert slot.state is RequestState.FAILED
    slot.begin()
    slot.finish(success=True)
    assert slot.state is RequestState.SUCCEEDED
    assert not slot.busy


def test_notice_lifetime():
    notice = Notice(kind="generation", message="x", created_at=100.0, dismiss_after=5.0)
    assert notice.is_active(now=104.9)
    assert not notice.is_active(now=105.0)

    sticky = Notice(kind="export", message="x", created_at=100.0)
    assert sticky.is_active(now=10_000.0)


# ── 제출 ──

def test_submit_success(form, pipeline, generator):
    result = pipeline.submit(form)

    assert result is pipeline.result
    assert result.markdown == SAMPLE_MARKDOWN
    assert len(result.document.tables) == 2
    assert pipeline.generation.state is RequestState.SUCCEEDED
    assert pipeline.active_notice() is None
    assert "THÔNG TIN, THU NHẬN VÀ XỬ LÝ THÔNG TIN" in generator.prompts[0]


def test_validation_failure_skips_service():
    generator = FakeGenerator()
    pipeline = _pipeline(generator=generator)

    assert pipeline.submit(make_form(ten_bai=" ", muc_tieu="")) is None
    assert generator.prompts == []
    assert pipeline.generation.state is RequestState.IDLE

    notice = pipeline.active_notice()
    assert notice.kind == "validation"
    assert notice.message == VALIDATION_MESSAGE
    assert notice.fields == ["ten_bai", "muc_tieu"]


def test_validation_failure_keeps_previous_result():
    pipeline = _pipeline()
    previous = pipeline.submit(make_form())
    pipeline.submit(make_form(lop=""))
    assert pipeline.result is previous


def test_generation_failure_clears_result_and_auto_dismisses():
    generator = FakeGenerator()
    pipeline = _pipeline(generator=generator)
    pipeline.submit(make_form())

    generator.error = GenerationError("HTTP 503")
    assert pipeline.submit(make_form()) is None
    assert pipeline.result is None
    assert pipeline.generation.state is RequestState.FAILED
    assert pipeline.can_submit

    notice = pipeline.active_notice()
    assert notice.kind == "generation"
    assert notice.message == GENERATION_FAILED_MESSAGE
    assert pipeline.active_notice(now=notice.created_at + 4.9) is notice
    assert pipeline.active_notice(now=notice.created_at + 5.0) is None
    assert pipeline.active_notice() is None


def test_unexpected_generator_error_becomes_generic_notice():
    pipeline = _pipeline(generator=FakeGenerator(error=KeyError("boom")))
    assert pipeline.submit(make_form()) is None
    assert pipeline.active_notice().message == GENERATION_FAILED_MESSAGE
    assert not pipeline.generation.busy


def test_new_submit_replaces_result():
    generator = FakeGenerator(text="# Một")
    pipeline = _pipeline(generator=generator)
    first = pipeline.submit(make_form())
    generator.text = "# Hai"
    second = pipeline.submit(make_form(ten_bai="Bài khác"))
    assert first is not second
    assert pipeline.result.markdown == "# Hai"


def test_submit_while_in_flight_rejected():
    pipeline = None
    errors = []

    class ReentrantGenerator(FakeGenerator):
        def generate(self, prompt):
            assert not pipeline.can_submit
            with pytest.raises(RequestInFlightError) as exc:
                pipeline.submit(make_form())
            errors.append(exc.value)
            return super().generate(prompt)

    generator = ReentrantGenerator()
    pipeline = _pipeline(generator=generator)
    assert pipeline.submit(make_form()) is not None
    assert len(errors) == 1
    assert len(generator.prompts) == 1


# ── 다운로드 ──

def test_download_without_result():
    pipeline = _pipeline()
    assert not pipeline.can_download
    with pytest.raises(NoResultError):
        pipeline.download()


def test_download_uses_title_stem():
    exporter = RecordingExporter()
    pipeline = _pipeline(exporter=exporter)
    pipeline.submit(make_form(ten_bai="Mạng máy tính"))

    artifact = pipeline.download()
    assert artifact.filename == "m_ng_m_y_t_nh.docx"
    assert artifact.content == b"ok"
    assert exporter.results == [pipeline.result]
    assert pipeline.export.state is RequestState.SUCCEEDED


def test_download_unsupported_format():
    pipeline = _pipeline()
    pipeline.submit(make_form())
    with pytest.raises(ValueError):
        pipeline.download(ExportFormat.PDF)


def test_export_failure_keeps_result_and_notice_until_ack():
    exporter = RecordingExporter(error=ExportError("docx hỏng"))
    pipeline = _pipeline(exporter=exporter)
    result = pipeline.submit(make_form())

    assert pipeline.download() is None
    assert pipeline.result is result
    assert pipeline.export.state is RequestState.FAILED
    assert pipeline.can_download

    notice = pipeline.active_notice()
    assert notice.kind == "export"
    assert notice.message == EXPORT_FAILED_MESSAGE
    assert pipeline.active_notice(now=notice.created_at + 3600) is notice

    pipeline.acknowledge_notice()
    assert pipeline.active_notice() is None

    exporter.error = None
    assert pipeline.download() is not None


def test_unexpected_export_error_becomes_notice():
    pipeline = _pipeline(exporter=RecordingExporter(error=OSError("disk")))
    pipeline.submit(make_form())
    assert pipeline.download() is None
    assert pipeline.active_notice().message == EXPORT_FAILED_MESSAGE
    assert not pipeline.export.busy


def test_download_while_in_flight_rejected():
    pipeline = None
    errors = []

    class ReentrantExporter(RecordingExporter):
        def export(self, result):
            assert not pipeline.can_download
            with pytest.raises(RequestInFlightError) as exc:
                pipeline.download()
            errors.append(exc.value)
            return super().export(result)

    pipeline = _pipeline(exporter=ReentrantExporter())
    pipeline.submit(make_form())
    assert pipeline.download() is not None
    assert len(errors) == 1


def test_load_result_without_service():
    generator = FakeGenerator()
    pipeline = _pipeline(generator=generator)
    result = pipeline.load_result(make_form(), SAMPLE_MARKDOWN)
    assert generator.prompts == []
    assert pipeline.result is result
    assert pipeline.download().filename.endswith(".docx")


def test_docx_and_pdf_through_real_exporters(form, pipeline, rasterizer):
    pipeline.submit(form)
    docx_artifact = pipeline.download(ExportFormat.DOCX)
    pdf_artifact = pipeline.download(ExportFormat.PDF)
    assert docx_artifact.content[:2] == b"PK"
    assert pdf_artifact.content.startswith(b"%PDF")
    assert len(rasterizer.pages) == 1


def test_export_notice_survives_later_submissions():
    exporter = RecordingExporter(error=ExportError("docx hỏng"))
    pipeline = _pipeline(exporter=exporter)
    pipeline.submit(make_form())
    pipeline.download()

    assert pipeline.submit(make_form()) is not None
    assert pipeline.active_notice().kind == "export"

    assert pipeline.submit(make_form(lop="")) is None
    assert [n.kind for n in pipeline.active_notices()] == ["export", "validation"]
    assert pipeline.active_notice().kind == "export"

    pipeline.acknowledge_notice()
    assert pipeline.active_notices() == []


class _ClearedResultPipeline(DefaultLessonPlanPipeline):
    """result를 읽을 때마다 다른 스레드가 바로 비운 것처럼 동작한다."""

    @property
    def result(self):
        value, self._stored = self._stored, None
        return value

    @result.setter
    def result(self, value):
        self._stored = value


def test_download_reads_result_once():
    pipeline = _ClearedResultPipeline(
        generator=FakeGenerator(),
        exporters={ExportFormat.DOCX: RecordingExporter()},
    )
    pipeline.result = LessonPlanResult(
        form=make_form(ten_bai="Mạng máy tính"),
        markdown=SAMPLE_MARKDOWN,
        document=build_document(SAMPLE_MARKDOWN),
    )

    artifact = pipeline.download()
    assert artifact.filename == "m_ng_m_y_t_nh.docx"
    with pytest.raises(NoResultError):
        pipeline.download()
