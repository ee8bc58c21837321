import argparse
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from .config import get_lookup_timeout, get_tie_break, load_env
from .logger import default_log_file, setup_logger

load_env()

from .. import pipeline
from ..recognizer import TesseractRecognizer, TextRecognizer
from ..retrievers import get_lookup_client
from ..retrievers.base import LookupClient
from ..sinks import LoggingResultSink

logger = logging.getLogger("pagevideo.server")

mcp = FastMCP("PageVideoServer")

_lookup_client: Optional[LookupClient] = None
_recognizer: Optional[TextRecognizer] = None


def get_client() -> LookupClient:
    """Lookup client for the configured store, created on first use."""
    global _lookup_client
    if _lookup_client is None:
        _lookup_client = get_lookup_client()
    return _lookup_client


def get_recognizer() -> TextRecognizer:
    global _recognizer
    if _recognizer is None:
        _recognizer = TesseractRecognizer()
    return _recognizer


@mcp.tool()
async def find_video_for_text(text: str) -> Dict[str, Any]:
    """
    Resolve recognized page text to a single instructional video.

    Each whitespace-separated word is looked up in the video keyword index
    concurrently; returns status "found" with the video URL, or "not_found".
    """
    return await pipeline.find_video(
        text,
        get_client(),
        LoggingResultSink(logger),
        tie_break=get_tie_break(),
        lookup_timeout=get_lookup_timeout(),
    )


@mcp.tool()
async def find_video_for_image(image_path: str) -> Dict[str, Any]:
    """
    Recognize text in a photographed page (path on the server) and resolve it
    to a single instructional video.
    """
    return await pipeline.find_video_for_image(
        image_path,
        get_recognizer(),
        get_client(),
        LoggingResultSink(logger),
        tie_break=get_tie_break(),
        lookup_timeout=get_lookup_timeout(),
    )


# Keys whose values should be masked when printing env
_ENV_MASK_KEYS = frozenset({"FIRESTORE_API_KEY", "FIRESTORE_ID_TOKEN"})


def print_startup_env() -> None:
    """
    Print relevant environment variables to console at server startup.
    Masks sensitive values (API keys, tokens).
    """
    keys = [
        "PAGEVIDEO_STORE", "PAGEVIDEO_LOCAL_INDEX", "PAGEVIDEO_TIE_BREAK", "PAGEVIDEO_LOOKUP_TIMEOUT",
        "FIRESTORE_PROJECT_ID", "FIRESTORE_API_KEY", "FIRESTORE_ID_TOKEN", "FIRESTORE_DATABASE",
        "FIRESTORE_COLLECTION", "FIRESTORE_KEYWORDS_FIELD", "FIRESTORE_URL_FIELD",
        "FIRESTORE_HTTP_TIMEOUT", "FIRESTORE_MAX_RESULTS", "TESSERACT_LANG",
    ]
    print("=== PageVideo server env ===")
    for k in keys:
        v = os.getenv(k)
        if v is None or v == "":
            print(f"  {k}= (unset)")
        elif k in _ENV_MASK_KEYS:
            print(f"  {k}= *** (set)")
        else:
            print(f"  {k}= {v}")
    print("============================")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="PageVideo MCP Server")
    parser.add_argument("--port", type=int, default=50010, help="Server port (default: 50010)")
    parser.add_argument("--host", default="0.0.0.0", help="Server host (default: 0.0.0.0)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log file path (default: ./pagevideo_YYYYMMDD.log)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else default_log_file()

    server_logger = setup_logger(name="pagevideo", level=args.log_level, log_file=log_file)
    server_logger.info(f"Log file: {log_file.resolve()}")

    print_startup_env()
    mcp.settings.host = args.host
    mcp.settings.port = args.port
    server_logger.info("Starting PageVideo MCP Server on %s:%s ...", args.host, args.port)
    mcp.run(transport="streamable-http")


if __name__ == "__main__":
    main()
