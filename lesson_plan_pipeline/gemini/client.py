"""Gemini 텍스트 생성 클라이언트 — ABC 인터페이스 + HTTP 구현체."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import ValidationError

from .models import GenerateContentRequest, GenerateContentResponse

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Không thể tạo giáo án. Vui lòng thử lại."


class GenerationError(RuntimeError):
    """생성 서비스 호출 실패 또는 사용할 수 없는 응답.

    user_message는 화면에 표시되는 일반 문구, detail은 로그용 원인.
    """

    def __init__(self, detail: str, user_message: str = GENERATION_FAILED_MESSAGE):
        self.detail = detail
        self.user_message = user_message
        super().__init__(user_message)


class GenerationClient(ABC):
    """텍스트 생성 서비스 추상 인터페이스."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """프롬프트를 보내고 생성된 Markdown 텍스트를 반환. 실패 시 GenerationError."""


class GeminiHttpClient(GenerationClient):
    """httpx 기반 Gemini generateContent 구현체. 자동 재시도는 하지 않는다."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        model: str = "gemini-2.5-flash",
        timeout: float = 120.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._client = httpx.Client(
            headers={"x-goog-api-key": api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def _url(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    def generate(self, prompt: str) -> str:
        if not self._api_key:
            raise GenerationError("GEMINI_API_KEY가 설정되지 않았습니다.")

        body = GenerateContentRequest.from_prompt(prompt).model_dump(exclude_none=True)
        logger.info(f"Gemini 호출: model={self._model}, 프롬프트 {len(prompt)}자")

        try:
            resp = self._client.post(self._url(), json=body)
        except httpx.HTTPError as e:
            raise GenerationError(f"Gemini 요청 실패: {e}") from e

        if resp.status_code != 200:
            raise GenerationError(f"Gemini 응답 상태 {resp.status_code}: {resp.text[:500]}")

        try:
            data = GenerateContentResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise GenerationError(f"Gemini 응답 파싱 실패: {e}") from e

        if data.prompt_feedback and data.prompt_feedback.block_reason:
            raise GenerationError(f"프롬프트 차단됨: {data.prompt_feedback.block_reason}")

        text = data.text
        if not text.strip():
            reason = data.candidates[0].finish_reason if data.candidates else "후보 없음"
            raise GenerationError(f"빈 응답 (finishReason={reason})")

        logger.debug(f"Gemini 응답 (앞부분): {text[:1000]}")
        if data.usage_metadata:
            logger.info(f"Gemini 토큰 사용량: {data.usage_metadata.total_token_count}")
        return text

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
