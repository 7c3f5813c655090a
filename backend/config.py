from pathlib import Path
from dotenv import load_dotenv
import os

# Load .env from the backend directory regardless of current working directory
_ENV_PATH = Path(__file__).with_name('.env')
load_dotenv(dotenv_path=_ENV_PATH)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Generation service (Gemini)
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.7"))
    GEMINI_TOP_P = float(os.getenv("GEMINI_TOP_P", "0.8"))
    GEMINI_TOP_K = int(os.getenv("GEMINI_TOP_K", "40"))
    GEMINI_MAX_OUTPUT_TOKENS = int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "1024"))
    # Ask the model for an incremental stream rather than a single result
    GENERATION_STREAMING = _env_bool("GENERATION_STREAMING", True)

    # Page extraction
    USER_AGENT = os.getenv(
        "USER_AGENT",
        # Realistic desktop Chrome UA to reduce 403s
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/124.0.0.0 Safari/537.36"
    )
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))
    MAX_CRAWL_SIZE = int(os.getenv("MAX_CRAWL_SIZE", "1000000"))
    MAX_CONTENT_CHARS = int(os.getenv("MAX_CONTENT_CHARS", "40000"))
    PREVIEW_CHARS = int(os.getenv("PREVIEW_CHARS", "200"))

    # Conversation history
    GREETING_SENTINEL = os.getenv("GREETING_SENTINEL", "Hello! How can I help you today?")
    HISTORY_INCLUDES_LATEST = _env_bool("HISTORY_INCLUDES_LATEST", True)

    # HTTP server
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))

    # Logging
    LOG_DIR = Path(os.getenv("LOG_DIR", str(Path(__file__).parent / "logs")))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    LOG_TO_FILE = _env_bool("LOG_TO_FILE", True)
    LOG_TO_STDERR = _env_bool("LOG_TO_STDERR", False)
