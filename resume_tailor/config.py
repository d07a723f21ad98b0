import os
import tempfile

from dotenv import load_dotenv

load_dotenv()


def _csv_env(name: str, default: str = "") -> list[str]:
    val = os.getenv(name, default)
    return [x.strip() for x in val.split(",") if x.strip()] if val else []


# =========================
# LLM
# =========================
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_URL = os.getenv("OPENAI_URL", "https://api.openai.com/v1/chat/completions")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4")
OPENAI_TEMPERATURE = 0.7
OPENAI_MAX_TOKENS = 2000
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "180"))

# =========================
# App
# =========================
APP_ENV = os.getenv("APP_ENV", "development")
IS_PRODUCTION = APP_ENV == "production"
WEB_ORIGINS = _csv_env("WEB_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# =========================
# PDF
# =========================
# A Unicode monospace TTF (e.g. DejaVuSansMono.ttf); when unset, Courier draws
# what it can and ReportLab's built-in CID face draws CJK runs
PDF_FONT_PATH = os.getenv("PDF_FONT_PATH", "")
PDF_CJK_FONT = os.getenv("PDF_CJK_FONT", "STSong-Light")

# =========================
# Sessions
# =========================
SESSION_COOKIE_NAME = "session"
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(60 * 60)))  # 1 hour
SESSION_BACKEND = os.getenv("SESSION_BACKEND", "file")
SESSION_DIR = os.getenv("SESSION_DIR") or tempfile.gettempdir()
