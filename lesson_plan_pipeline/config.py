from dotenv import load_dotenv
import os

load_dotenv()

GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
GEMINI_BASE_URL: str = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_TIMEOUT_SEC: float = float(os.getenv("GEMINI_TIMEOUT_SEC", "120"))

# 알림 자동 해제 (검증/생성 오류만, 내보내기 오류는 확인 필요)
NOTICE_DISMISS_SEC: float = 5.0

# 파일명
DEFAULT_FILE_STEM: str = "giao_an"

# PDF 래스터화
PDF_CAPTURE_SCALE: int = 2
PDF_DPI: int = 150
PREVIEW_VIEWPORT_WIDTH: int = 900
