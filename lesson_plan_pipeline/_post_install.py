"""PDF 내보내기용 Chromium 설치 헬퍼.

lesson-plan-install-browsers 명령어로 실행:
  lesson-plan-install-browsers             # Chromium + 시스템 의존성
  lesson-plan-install-browsers --no-deps   # Chromium만 (권한이 없는 환경)
"""

import subprocess
import sys


def install_command(with_deps: bool = True) -> list[str]:
    cmd = [sys.executable, "-m", "playwright", "install"]
    if with_deps:
        cmd.append("--with-deps")
    cmd.append("chromium")
    return cmd


def main():
    cmd = install_command(with_deps="--no-deps" not in sys.argv[1:])
    print(f"Running: {' '.join(cmd)}")
    subprocess.run(cmd, check=True)
    print("Đã cài đặt Chromium cho xuất PDF.")


if __name__ == "__main__":
    main()
