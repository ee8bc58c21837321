import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

DEFAULT_STORE = "local"
DEFAULT_TIE_BREAK = "first_keyword"
DEFAULT_LOOKUP_TIMEOUT = 10.0
DEFAULT_COLLECTION = "videos"
DEFAULT_KEYWORDS_FIELD = "keywords"
DEFAULT_URL_FIELD = "videoURL"


def load_env() -> None:
    """
    Load environment variables from the project root `.env`.

    Do not rely on current working directory (MCP tooling may import this module).
    """
    project_root = Path(__file__).resolve().parents[2]
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=True)
        return

    # Fallback to CWD for compatibility
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(cwd_env, override=True)


def get_store_backend() -> str:
    """
    - PAGEVIDEO_STORE: "firestore" | "local" (default "local")
    """
    return (os.getenv("PAGEVIDEO_STORE") or DEFAULT_STORE).strip().lower() or DEFAULT_STORE


def get_local_index_path() -> Path:
    """
    Get the local JSON keyword index.
    - PAGEVIDEO_LOCAL_INDEX: path to a JSON list of video records
    Defaults to <project>/data/videos.json.
    """
    index_path = os.getenv("PAGEVIDEO_LOCAL_INDEX", "").strip()
    if index_path:
        return Path(index_path)
    return Path(__file__).resolve().parents[2] / "data" / "videos.json"


def get_tie_break() -> str:
    """
    - PAGEVIDEO_TIE_BREAK: "first_keyword" (deterministic) | "last_completed"
    """
    return (os.getenv("PAGEVIDEO_TIE_BREAK") or DEFAULT_TIE_BREAK).strip().lower() or DEFAULT_TIE_BREAK


def get_lookup_timeout() -> Optional[float]:
    """
    Per-keyword lookup deadline in seconds.
    - PAGEVIDEO_LOOKUP_TIMEOUT: seconds (default 10); 0 or negative disables the deadline
    """
    raw = os.getenv("PAGEVIDEO_LOOKUP_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_LOOKUP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_LOOKUP_TIMEOUT
    if value <= 0:
        return None
    return value


def get_firestore_config() -> Dict[str, Any]:
    """
    Firestore config is read from environment variables to avoid hardcoding secrets.
    - FIRESTORE_PROJECT_ID: GCP project id (required for the firestore store)
    - FIRESTORE_API_KEY: optional web API key
    - FIRESTORE_ID_TOKEN: optional bearer token
    - FIRESTORE_DATABASE: database id, default "(default)"
    - FIRESTORE_COLLECTION / FIRESTORE_KEYWORDS_FIELD / FIRESTORE_URL_FIELD: schema names
    - FIRESTORE_HTTP_TIMEOUT: seconds per request (default 15)
    - FIRESTORE_MAX_RESULTS: documents fetched per keyword (default 1)
    """
    try:
        http_timeout = float(os.getenv("FIRESTORE_HTTP_TIMEOUT", "15"))
    except ValueError:
        http_timeout = 15.0
    try:
        max_results = int(os.getenv("FIRESTORE_MAX_RESULTS", "1"))
    except ValueError:
        max_results = 1
    return {
        "project_id": os.getenv("FIRESTORE_PROJECT_ID", "").strip() or None,
        "api_key": os.getenv("FIRESTORE_API_KEY", "").strip() or None,
        "id_token": os.getenv("FIRESTORE_ID_TOKEN", "").strip() or None,
        "database": os.getenv("FIRESTORE_DATABASE", "").strip() or "(default)",
        "collection": os.getenv("FIRESTORE_COLLECTION", "").strip() or DEFAULT_COLLECTION,
        "keywords_field": os.getenv("FIRESTORE_KEYWORDS_FIELD", "").strip() or DEFAULT_KEYWORDS_FIELD,
        "url_field": os.getenv("FIRESTORE_URL_FIELD", "").strip() or DEFAULT_URL_FIELD,
        "http_timeout": max(1.0, http_timeout),
        "max_results": max(1, max_results),
    }


def get_ocr_language() -> str:
    """
    - TESSERACT_LANG: tesseract language code(s), e.g. "eng" or "jpn+eng"
    """
    return os.getenv("TESSERACT_LANG", "").strip() or "eng"
