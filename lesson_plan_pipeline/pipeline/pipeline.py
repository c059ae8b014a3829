"""교안 생성 파이프라인 — ABC 인터페이스 + 구현체.

제출(submit): 폼 검증 → 프롬프트 구성 → 생성 서비스 호출 → Markdown → Document
다운로드(download): 생성 결과 → 선택한 형식의 내보내기 → 파일

두 동작 모두 여기서 오류를 받아 알림(Notice)으로 남기고 None을 반환한다.
진행 중인 동작을 다시 시작하면 RequestInFlightError가 호출자에게 전달된다.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..config import GEMINI_API_KEY, GEMINI_BASE_URL, GEMINI_MODEL, GEMINI_TIMEOUT_SEC, NOTICE_DISMISS_SEC
from ..document.builder import build_document
from ..export.base import EXPORT_FAILED_MESSAGE, ExportArtifact, ExportError, Exporter
from ..export.docx_exporter import DocxExporter
from ..export.pdf_exporter import PdfExporter
from ..gemini.client import GENERATION_FAILED_MESSAGE, GeminiHttpClient, GenerationClient, GenerationError
from ..lesson.models import ExportFormat, FormData, FormValidationError, safe_file_stem
from ..lesson.prompt import compose_prompt
from .models import (
    LessonPlanResult,
    NoResultError,
    Notice,
    NoticeKind,
    RequestInFlightError,
    RequestSlot,
)

logger = logging.getLogger(__name__)


class LessonPlanPipeline(ABC):
    """교안 생성 파이프라인 추상 인터페이스."""

    @abstractmethod
    def submit(self, form: FormData) -> Optional[LessonPlanResult]:
        """폼을 제출하여 교안을 생성한다. 실패 시 알림을 남기고 None."""

    @abstractmethod
    def download(self, export_format: Optional[ExportFormat] = None) -> Optional[ExportArtifact]:
        """현재 결과를 문서 파일로 내보낸다. 실패 시 알림을 남기고 None."""


class DefaultLessonPlanPipeline(LessonPlanPipeline):
    """Gemini 생성 + Word/PDF 내보내기 기본 구현체. 세션 하나의 상태를 가진다."""

    def __init__(
        self,
        generator: GenerationClient,
        exporters: dict[ExportFormat, Exporter],
        notice_dismiss_sec: float = NOTICE_DISMISS_SEC,
    ):
        self._generator = generator
        self._exporters = exporters
        self._notice_dismiss_sec = notice_dismiss_sec

        self.generation = RequestSlot("generation")
        self.export = RequestSlot("export")
        self.result: Optional[LessonPlanResult] = None
        self._notice: Optional[Notice] = None
        # 내보내기 오류는 확인 전까지 유지되므로 검증/생성 알림과 따로 둔다
        self._export_notice: Optional[Notice] = None

    # --- 상태 ---

    @property
    def can_submit(self) -> bool:
        return not self.generation.busy

    @property
    def can_download(self) -> bool:
        return self.result is not None and not self.export.busy

    def active_notices(self, now: Optional[float] = None) -> list[Notice]:
        """표시 중인 알림 목록 (확인 대기 중인 내보내기 알림이 먼저). 자동 해제된 알림은 버린다."""
        if self._notice is not None and not self._notice.is_active(now):
            self._notice = None
        return [n for n in (self._export_notice, self._notice) if n is not None]

    def active_notice(self, now: Optional[float] = None) -> Optional[Notice]:
        notices = self.active_notices(now)
        return notices[0] if notices else None

    def acknowledge_notice(self) -> None:
        self._export_notice = None
        self._notice = None

    def _notify(self, kind: NoticeKind, message: str, fields: Optional[list[str]] = None) -> Notice:
        if kind == "export":
            self._export_notice = Notice(kind=kind, message=message, fields=fields or [])
            return self._export_notice
        self._notice = Notice(
            kind=kind, message=message, fields=fields or [], dismiss_after=self._notice_dismiss_sec
        )
        return self._notice

    # --- 제출 ---

    def submit(self, form: FormData) -> Optional[LessonPlanResult]:
        if self.generation.busy:
            raise RequestInFlightError("교안 생성이 이미 진행 중입니다.")

        try:
            form.validate_required()
        except FormValidationError as e:
            logger.warning(f"필수 항목 누락: {', '.join(e.fields)}")
            self._notify("validation", str(e), e.fields)
            return None

        self.generation.begin()
        success = False
        self._notice = None
        self.result = None
        try:
            prompt = compose_prompt(form)
            markdown = self._generator.generate(prompt)
            self.result = LessonPlanResult(form=form, markdown=markdown, document=build_document(markdown))
            success = True
            logger.info(f"교안 생성 완료: {form.lesson_title} (블록 {len(self.result.document)}개)")
            return self.result
        except GenerationError as e:
            logger.error(f"교안 생성 실패: {e.detail}")
            self._notify("generation", e.user_message)
        except Exception:
            logger.exception("교안 생성 중 예기치 않은 오류")
            self._notify("generation", GENERATION_FAILED_MESSAGE)
        finally:
            self.generation.finish(success)
        return None

    def load_result(self, form: FormData, markdown: str) -> LessonPlanResult:
        """생성 서비스 없이 기존 Markdown을 결과로 채택한다 (재내보내기용)."""
        if self.generation.busy:
            raise RequestInFlightError("교안 생성이 이미 진행 중입니다.")
        self.result = LessonPlanResult(form=form, markdown=markdown, document=build_document(markdown))
        return self.result

    # --- 다운로드 ---

    def download(self, export_format: Optional[ExportFormat] = None) -> Optional[ExportArtifact]:
        # 다른 스레드의 submit()이 result를 비울 수 있으므로 한 번만 읽는다
        result = self.result
        if result is None:
            raise NoResultError("다운로드할 교안이 없습니다.")

        fmt = export_format or result.form.export_format
        exporter = self._exporters.get(fmt)
        if exporter is None:
            raise ValueError(f"지원하지 않는 형식: {fmt.value}")

        self.export.begin()
        success = False
        try:
            artifact = exporter.export_artifact(result, safe_file_stem(result.form.lesson_title))
            success = True
            logger.info(f"내보내기 완료: {artifact.filename} ({len(artifact.content)} bytes)")
            return artifact
        except ExportError as e:
            logger.error(f"내보내기 실패: {e.detail}")
            self._notify("export", e.user_message)
        except Exception:
            logger.exception("내보내기 중 예기치 않은 오류")
            self._notify("export", EXPORT_FAILED_MESSAGE)
        finally:
            self.export.finish(success)
        return None


def create_default_pipeline() -> DefaultLessonPlanPipeline:
    """환경 설정으로 Gemini 클라이언트와 Word/PDF 내보내기를 조립한다."""
    generator = GeminiHttpClient(
        api_key=GEMINI_API_KEY,
        base_url=GEMINI_BASE_URL,
        model=GEMINI_MODEL,
        timeout=GEMINI_TIMEOUT_SEC,
    )
    return DefaultLessonPlanPipeline(
        generator=generator,
        exporters={ExportFormat.DOCX: DocxExporter(), ExportFormat.PDF: PdfExporter()},
    )
