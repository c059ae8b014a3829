"""교안 생성 웹 프론트엔드 — 폼 페이지 + JSON API.

  GET  /                          폼 페이지
  POST /api/lesson-plan           폼 제출 → Markdown + 미리보기 HTML
  GET  /api/lesson-plan/download  현재 결과를 Word/PDF로 다운로드
  GET  /api/state                 요청 슬롯 상태와 알림
  POST /api/notice/ack            내보내기 오류 알림 확인

세션은 앱 인스턴스당 하나이며 (단일 사용자 로컬 도구),
같은 종류의 요청이 진행 중이면 409를 돌려준다.
"""

from __future__ import annotations

import argparse
import html
import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from .._resources import load_template
from ..lesson.models import LESSON_PHASES, STANDARDS, ExportFormat, FormData, safe_file_stem
from ..pipeline.models import NoResultError, RequestInFlightError
from ..pipeline.pipeline import DefaultLessonPlanPipeline, create_default_pipeline
from ..preview.renderer import render_preview_html

logger = logging.getLogger(__name__)

router = APIRouter()


class LessonPlanResponse(BaseModel):
    markdown: str
    preview_html: str
    file_name: str


class StateResponse(BaseModel):
    generation: str
    export: str
    can_submit: bool
    can_download: bool
    notice: Optional[dict] = None


def get_pipeline(request: Request) -> DefaultLessonPlanPipeline:
    return request.app.state.pipeline


def _notice_detail(pipeline: DefaultLessonPlanPipeline, kinds: tuple[str, ...]) -> dict:
    """방금 실패한 동작의 알림. 확인 대기 중인 다른 종류의 알림은 건너뛴다."""
    for notice in pipeline.active_notices():
        if notice.kind in kinds:
            return notice.model_dump(include={"kind", "message", "fields"})
    return {"kind": "unknown", "message": "", "fields": []}


def _options_html(options: list[str], selected: str) -> str:
    return "\n".join(
        f'<option value="{html.escape(o)}"{" selected" if o == selected else ""}>{html.escape(o)}</option>'
        for o in options
    )


# -------------------------
# Pages
# -------------------------
@router.get("/", response_class=HTMLResponse)
def index():
    defaults = FormData()
    page = load_template("form.html")
    page = page.replace("{{LESSON_PHASE_OPTIONS}}", _options_html(LESSON_PHASES, defaults.lesson_phase))
    page = page.replace("{{STANDARD_OPTIONS}}", _options_html(STANDARDS, defaults.standard))
    page = page.replace(
        "{{EXPORT_FORMAT_OPTIONS}}",
        _options_html([f.value for f in ExportFormat], defaults.export_format.value),
    )
    return page


# -------------------------
# API
# -------------------------
@router.post("/api/lesson-plan", response_model=LessonPlanResponse)
def create_lesson_plan(form: FormData, pipeline: DefaultLessonPlanPipeline = Depends(get_pipeline)):
    try:
        result = pipeline.submit(form)
    except RequestInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if result is None:
        detail = _notice_detail(pipeline, ("validation", "generation"))
        status = 422 if detail["kind"] == "validation" else 502
        raise HTTPException(status_code=status, detail=detail)

    return LessonPlanResponse(
        markdown=result.markdown,
        preview_html=render_preview_html(result.markdown),
        file_name=f"{safe_file_stem(form.lesson_title)}.{form.export_format.extension}",
    )


@router.get("/api/lesson-plan/download")
def download_lesson_plan(
    format: Optional[str] = None, pipeline: DefaultLessonPlanPipeline = Depends(get_pipeline)
):
    try:
        fmt = ExportFormat.from_extension(format) if format else None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        artifact = pipeline.download(fmt)
    except NoResultError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RequestInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if artifact is None:
        raise HTTPException(status_code=500, detail=_notice_detail(pipeline, ("export",)))

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


@router.get("/api/state", response_model=StateResponse)
def get_state(pipeline: DefaultLessonPlanPipeline = Depends(get_pipeline)):
    notice = pipeline.active_notice()
    return StateResponse(
        generation=pipeline.generation.state.value,
        export=pipeline.export.state.value,
        can_submit=pipeline.can_submit,
        can_download=pipeline.can_download,
        notice=notice.model_dump(include={"kind", "message", "fields"}) if notice else None,
    )


@router.post("/api/notice/ack", status_code=204)
def acknowledge_notice(pipeline: DefaultLessonPlanPipeline = Depends(get_pipeline)):
    pipeline.acknowledge_notice()
    return Response(status_code=204)


def create_app(pipeline: Optional[DefaultLessonPlanPipeline] = None) -> FastAPI:
    app = FastAPI(title="Soạn giáo án Tin học THCS")
    app.state.pipeline = pipeline or create_default_pipeline()
    app.include_router(router)
    return app


def main():
    import uvicorn

    parser = argparse.ArgumentParser(description="Soạn giáo án Tin học THCS — web")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("-v", "--verbose", action="store_true", help="상세 로그")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    logger.info(f"웹 서버 시작: http://{args.host}:{args.port}")
    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
