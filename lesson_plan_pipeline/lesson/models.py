"""교안 입력 폼 데이터 모델.

원본 웹 폼의 키(ten_truong, lop, ...)를 alias로 유지하여
프론트엔드 JSON과 Python 필드명 양쪽으로 생성할 수 있다.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from ..config import DEFAULT_FILE_STEM

LESSON_PHASES: list[str] = [
    "Toàn bộ tiến trình",
    "Khởi động",
    "Hình thành kiến thức mới",
    "Luyện tập",
    "Vận dụng - Mở rộng",
    "Tổng kết",
]

STANDARDS: list[str] = [
    "Công văn 5512/BGDĐT-GDTrH",
    "Thông tư 32/2018",
    "Thông tư 22/2021",
]

LessonPhase = Literal[
    "Toàn bộ tiến trình",
    "Khởi động",
    "Hình thành kiến thức mới",
    "Luyện tập",
    "Vận dụng - Mở rộng",
    "Tổng kết",
]
Standard = Literal[
    "Công văn 5512/BGDĐT-GDTrH",
    "Thông tư 32/2018",
    "Thông tư 22/2021",
]


class ExportFormat(str, Enum):
    """내보내기 형식. 값은 폼 셀렉터에 표시되는 문자열."""

    DOCX = "Word (.docx)"
    PDF = "PDF (.pdf)"

    @property
    def extension(self) -> str:
        return "docx" if self is ExportFormat.DOCX else "pdf"

    @classmethod
    def from_extension(cls, ext: str) -> "ExportFormat":
        ext = ext.lower().lstrip(".")
        for fmt in cls:
            if fmt.extension == ext:
                return fmt
        valid = ", ".join(f.extension for f in cls)
        raise ValueError(f"알 수 없는 형식: {ext} (가능: {valid})")


# 필수 입력 필드 (alias 기준, 원본 폼 순서)
REQUIRED_FIELDS: tuple[str, ...] = ("lop", "ten_bai", "muc_tieu")

VALIDATION_MESSAGE = "Vui lòng điền đầy đủ các trường: Lớp, Tên bài học và Yêu cầu cần đạt."


class FormValidationError(ValueError):
    """필수 필드 누락. 생성 서비스를 호출하기 전에 발생한다."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(VALIDATION_MESSAGE)


class FormData(BaseModel):
    """한 번의 제출에 사용되는 교안 폼 입력값 (불변)."""

    school_name: str = Field("Trường THCS Mẫu", alias="ten_truong")
    department: str = Field("Tổ Khoa học Tự nhiên", alias="to_chuyen_mon")
    teacher_name: str = Field("Nguyễn Văn A", alias="ten_giao_vien")
    subject: Literal["Tin học"] = Field("Tin học", alias="mon_hoc")
    grade: str = Field("6", alias="lop")
    textbook: str = Field("Cánh Diều", alias="bo_sach")
    lesson_title: str = Field("", alias="ten_bai")
    objectives: str = Field("", alias="muc_tieu")
    lesson_phase: LessonPhase = Field("Toàn bộ tiến trình", alias="hoat_dong")
    standard: Standard = Field("Công văn 5512/BGDĐT-GDTrH", alias="chuan_thong_tu")
    export_format: ExportFormat = Field(ExportFormat.DOCX, alias="dinh_dang_xuat")

    model_config = {"populate_by_name": True, "frozen": True}

    def missing_required_fields(self) -> list[str]:
        """비어 있는(공백만 있는 경우 포함) 필수 필드의 alias 목록."""
        values = self.model_dump(by_alias=True)
        return [name for name in REQUIRED_FIELDS if not str(values[name]).strip()]

    def validate_required(self) -> None:
        missing = self.missing_required_fields()
        if missing:
            raise FormValidationError(missing)


_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


def safe_file_stem(title: str) -> str:
    """교안 제목 → 다운로드 파일명 (확장자 제외).

    ASCII 영숫자 외의 모든 문자를 '_'로 바꾸고 소문자로 만든다.
    영숫자가 하나도 남지 않으면 기본 이름을 쓴다.
    """
    stem = _UNSAFE_CHARS.sub("_", title).lower()
    if not stem.strip("_"):
        return DEFAULT_FILE_STEM
    return stem
