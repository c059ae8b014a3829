"""CLI 테스트 — 프롬프트 출력, 기존 Markdown 재내보내기, 입력 검증."""

import docx
import pytest

from lesson_plan_pipeline.cli import build_parser, form_from_args, main
from lesson_plan_pipeline.lesson.models import ExportFormat

from conftest import SAMPLE_MARKDOWN


def test_form_from_args_reads_objectives_file(tmp_path):
    objectives = tmp_path / "muc_tieu.txt"
    objectives.write_text("Biết thông tin là gì.\n", encoding="utf-8")

    args = build_parser().parse_args(
        ["--lop", "9", "--ten-bai", "Thuật toán", "--muc-tieu-file", str(objectives), "--format", "pdf"]
    )
    form = form_from_args(args)
    assert form.grade == "9"
    assert form.objectives == "Biết thông tin là gì."
    assert form.export_format is ExportFormat.PDF


def test_print_prompt(capsys):
    main(["--ten-bai", "Mạng máy tính", "--muc-tieu", "Nêu khái niệm", "--print-prompt"])
    out = capsys.readouterr().out
    assert "# MẠNG MÁY TÍNH" in out
    assert "Nêu khái niệm" in out


def test_missing_fields_exit(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--ten-bai", "Mạng máy tính", "--output-dir", str(tmp_path)])
    assert exc.value.code == 1
    assert "Vui lòng điền đầy đủ" in capsys.readouterr().err


def test_from_markdown_to_docx(tmp_path):
    md = tmp_path / "giao_an.md"
    md.write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    out_dir = tmp_path / "out"

    main([
        "--ten-bai", "Mạng máy tính",
        "--muc-tieu", "x",
        "--from-markdown", str(md),
        "--format", "docx",
        "--output-dir", str(out_dir),
    ])

    path = out_dir / "m_ng_m_y_t_nh.docx"
    assert path.exists()
    assert len(docx.Document(str(path)).tables) == 2


def test_install_browsers_command():
    from lesson_plan_pipeline._post_install import install_command

    assert install_command()[-3:] == ["install", "--with-deps", "chromium"]
    assert "--with-deps" not in install_command(with_deps=False)


def test_from_markdown_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([
            "--ten-bai", "Mạng máy tính",
            "--muc-tieu", "x",
            "--from-markdown", str(tmp_path / "khong_co.md"),
            "--output-dir", str(tmp_path),
        ])
    assert exc.value.code == 1
    assert "ERROR:" in capsys.readouterr().err
    assert not list(tmp_path.glob("*.docx"))
