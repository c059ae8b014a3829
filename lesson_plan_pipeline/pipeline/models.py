"""세션 상태 및 데이터 모델 — 요청 슬롯, 알림, 생성 결과."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..document.models import Document
from ..lesson.models import FormData


class RequestInFlightError(RuntimeError):
    """같은 슬롯의 요청이 진행 중일 때 새 요청을 시작하려 함."""


class NoResultError(LookupError):
    """생성 결과가 없는 상태에서 다운로드를 요청함."""


class RequestState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RequestSlot:
    """한 번에 하나의 요청만 허용하는 단일 슬롯.

    begin()은 IN_FLIGHT로 전이하거나 RequestInFlightError를 낸다.
    호출자는 finish()를 finally에서 불러 성공/실패와 관계없이 슬롯을 해제한다.
    """

    def __init__(self, name: str):
        self.name = name
        self._state = RequestState.IDLE
        self._lock = threading.Lock()

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state is RequestState.IN_FLIGHT

    def begin(self) -> None:
        with self._lock:
            if self._state is RequestState.IN_FLIGHT:
                raise RequestInFlightError(f"{self.name} 요청이 이미 진행 중입니다.")
            self._state = RequestState.IN_FLIGHT

    def finish(self, success: bool) -> None:
        with self._lock:
            self._state = RequestState.SUCCEEDED if success else RequestState.FAILED


NoticeKind = Literal["validation", "generation", "export"]


class Notice(BaseModel):
    """사용자에게 보여줄 오류 알림.

    dismiss_after가 있으면 그 시간(초) 뒤 자동으로 사라지고,
    None이면 acknowledge 전까지 유지된다 (내보내기 오류).
    """
    kind: NoticeKind
    message: str
    fields: list[str] = Field(default_factory=list)
    created_at: float = Field(default_factory=time.monotonic)
    dismiss_after: Optional[float] = None

    def is_active(self, now: Optional[float] = None) -> bool:
        if self.dismiss_after is None:
            return True
        now = time.monotonic() if now is None else now
        return now - self.created_at < self.dismiss_after


@dataclass(frozen=True)
class LessonPlanResult:
    """생성 1회분 결과. 다음 제출 시 폐기된다."""

    form: FormData
    markdown: str
    document: Document
