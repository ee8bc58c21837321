#!/usr/bin/env python3
"""
Command-line lookup: resolve page text (or a photographed page) to one video.

Examples:
  uv run python scripts/find_video_cli.py --text "mitosis cell division"
  uv run python scripts/find_video_cli.py --text "mitosis cell division" --index ./data/videos.json
  uv run python scripts/find_video_cli.py --image ./page.jpg --store firestore --play
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Make the project root importable when run as a script
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from pagevideo_server.core.config import get_lookup_timeout, get_tie_break, load_env
from pagevideo_server.core.error import PageVideoError
from pagevideo_server.core.logger import setup_logger
from pagevideo_server.pipeline import find_video, find_video_for_image
from pagevideo_server.recognizer import TesseractRecognizer
from pagevideo_server.retrievers import LocalIndexLookupClient, get_lookup_client
from pagevideo_server.sinks import BrowserPlaybackSink, LoggingResultSink


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve a page's text to an instructional video")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Recognized text of the page")
    source.add_argument("--image", help="Path to a photographed page (requires the ocr extra)")
    parser.add_argument("--store", choices=["local", "firestore"], default=None, help="Override PAGEVIDEO_STORE")
    parser.add_argument("--index", default=None, help="Local JSON index path (implies --store local)")
    parser.add_argument(
        "--tie-break",
        choices=["first_keyword", "last_completed"],
        default=None,
        help="Override PAGEVIDEO_TIE_BREAK",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-lookup deadline in seconds (0 = none)")
    parser.add_argument("--play", action="store_true", help="Open the resolved video in the browser")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> Dict[str, Any]:
    if args.index:
        client = LocalIndexLookupClient(Path(args.index))
    else:
        client = get_lookup_client(args.store)

    tie_break = args.tie_break or get_tie_break()
    if args.timeout is None:
        lookup_timeout = get_lookup_timeout()
    else:
        lookup_timeout = args.timeout if args.timeout > 0 else None

    sink = BrowserPlaybackSink() if args.play else LoggingResultSink()
    if args.image:
        return await find_video_for_image(
            args.image,
            TesseractRecognizer(),
            client,
            sink,
            tie_break=tie_break,
            lookup_timeout=lookup_timeout,
        )
    return await find_video(args.text, client, sink, tie_break=tie_break, lookup_timeout=lookup_timeout)


def main(argv: Optional[List[str]] = None) -> int:
    load_env()
    args = parse_args(argv)
    # stdout carries the JSON result
    setup_logger(name="pagevideo", level=args.log_level, stream=sys.stderr)
    try:
        result = asyncio.run(run(args))
    except PageVideoError as e:
        print(json.dumps(e.to_dict(), ensure_ascii=False, indent=2), file=sys.stderr)
        return 2
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0 if result["status"] == "found" else 1


if __name__ == "__main__":
    sys.exit(main())
