"""내보내기 공통 인터페이스."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..pipeline.models import LessonPlanResult

EXPORT_FAILED_MESSAGE = "Tải xuống thất bại. Vui lòng thử lại."


class ExportError(RuntimeError):
    """문서 변환/래스터화 실패. 생성 결과는 그대로 남아 재시도할 수 있다."""

    def __init__(self, detail: str, user_message: str = EXPORT_FAILED_MESSAGE):
        self.detail = detail
        self.user_message = user_message
        super().__init__(user_message)


@dataclass(frozen=True)
class ExportArtifact:
    """다운로드할 파일 한 개."""

    filename: str
    content: bytes
    media_type: str

    def save(self, output_dir: Path | str) -> Path:
        path = Path(output_dir) / self.filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.content)
        return path


class Exporter(ABC):
    """생성 결과 → 바이너리 문서 추상 인터페이스."""

    extension: str = ""
    media_type: str = "application/octet-stream"

    @abstractmethod
    def export(self, result: LessonPlanResult) -> bytes:
        """결과를 문서 바이트로 변환. 실패 시 ExportError."""

    def export_artifact(self, result: LessonPlanResult, file_stem: str) -> ExportArtifact:
        return ExportArtifact(
            filename=f"{file_stem}.{self.extension}",
            content=self.export(result),
            media_type=self.media_type,
        )
