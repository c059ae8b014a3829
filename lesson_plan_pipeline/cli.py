"""교안 생성 CLI.

사용법:
  # Gemini로 생성 후 Word 저장
  lesson-plan-generate --lop 6 --ten-bai "Thông tin, thu nhận và xử lý thông tin" \\
      --muc-tieu-file muc_tieu.txt --format docx

  # 프롬프트만 확인 (서비스 호출 없음)
  lesson-plan-generate --lop 7 --ten-bai "Mạng máy tính" --muc-tieu "..." --print-prompt

  # 이미 생성된 Markdown을 PDF로 다시 내보내기
  lesson-plan-generate --ten-bai "Mạng máy tính" --muc-tieu "..." \\
      --from-markdown output/mang_m_y_t_nh.md --format pdf
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .lesson.models import LESSON_PHASES, STANDARDS, ExportFormat, FormData, safe_file_stem
from .lesson.prompt import compose_prompt
from .pipeline.pipeline import create_default_pipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Soạn giáo án Tin học THCS bằng AI")

    # 일반 정보
    parser.add_argument("--ten-truong", default="Trường THCS Mẫu", help="Tên trường")
    parser.add_argument("--to-chuyen-mon", default="Tổ Khoa học Tự nhiên", help="Tổ chuyên môn")
    parser.add_argument("--ten-giao-vien", default="Nguyễn Văn A", help="Họ và tên giáo viên")

    # 교안 내용
    parser.add_argument("--lop", default="6", help="Lớp (ví dụ: 6, 7, 8, 9)")
    parser.add_argument("--bo-sach", default="Cánh Diều", help="Bộ sách giáo khoa")
    parser.add_argument("--ten-bai", default="", help="Tên bài học")
    parser.add_argument("--muc-tieu", default="", help="Yêu cầu cần đạt / Mục tiêu bài học")
    parser.add_argument("--muc-tieu-file", default=None, help="Đọc mục tiêu từ tệp văn bản (mỗi dòng một ý)")
    parser.add_argument("--hoat-dong", default=LESSON_PHASES[0], choices=LESSON_PHASES, help="Phần của giáo án muốn soạn")
    parser.add_argument("--chuan", default=STANDARDS[0], choices=STANDARDS, help="Chuẩn theo Công văn / Thông tư")

    # 출력
    parser.add_argument("--format", default="docx", choices=["docx", "pdf"], help="Định dạng xuất")
    parser.add_argument("--output-dir", default="output", help="Thư mục lưu tệp")
    parser.add_argument("--from-markdown", default=None, help="Xuất từ tệp Markdown có sẵn, không gọi AI")
    parser.add_argument("--print-prompt", action="store_true", help="Chỉ in prompt rồi thoát")
    parser.add_argument("-v", "--verbose", action="store_true", help="상세 로그")
    return parser


def form_from_args(args: argparse.Namespace) -> FormData:
    objectives = args.muc_tieu
    if args.muc_tieu_file:
        objectives = Path(args.muc_tieu_file).read_text(encoding="utf-8").strip()

    return FormData(
        ten_truong=args.ten_truong,
        to_chuyen_mon=args.to_chuyen_mon,
        ten_giao_vien=args.ten_giao_vien,
        lop=args.lop,
        bo_sach=args.bo_sach,
        ten_bai=args.ten_bai,
        muc_tieu=objectives,
        hoat_dong=args.hoat_dong,
        chuan_thong_tu=args.chuan,
        dinh_dang_xuat=ExportFormat.from_extension(args.format),
    )


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        form = form_from_args(args)
    except (OSError, ValidationError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    if args.print_prompt:
        print(compose_prompt(form))
        return

    out_dir = Path(args.output_dir)
    stem = safe_file_stem(form.lesson_title)
    pipeline = create_default_pipeline()

    print(f"Giáo án: {form.lesson_title or '(chưa có tên)'}")
    print(f"Lớp: {form.grade} | Phần: {form.lesson_phase} | Chuẩn: {form.standard}")
    print()

    # ── 생성 또는 기존 Markdown 채택 ──
    if args.from_markdown:
        try:
            markdown = Path(args.from_markdown).read_text(encoding="utf-8")
        except OSError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            sys.exit(1)
        pipeline.load_result(form, markdown)
    else:
        result = pipeline.submit(form)
        if result is None:
            notice = pipeline.active_notice()
            print(f"Lỗi: {notice.message if notice else 'không rõ'}", file=sys.stderr)
            sys.exit(1)
        md_path = out_dir / f"{stem}.md"
        md_path.parent.mkdir(parents=True, exist_ok=True)
        md_path.write_text(result.markdown, encoding="utf-8")
        print(f"Markdown: {md_path}")

    # ── 내보내기 ──
    artifact = pipeline.download(form.export_format)
    if artifact is None:
        notice = pipeline.active_notice()
        print(f"Lỗi: {notice.message if notice else 'không rõ'}", file=sys.stderr)
        sys.exit(1)

    path = artifact.save(out_dir)
    print(f"Đã lưu: {path}")
    print(f"Số khối: {len(pipeline.result.document)}, bảng: {len(pipeline.result.document.tables)}")


if __name__ == "__main__":
    main()
