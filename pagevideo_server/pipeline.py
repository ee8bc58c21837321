"""
End-to-end flow: recognized text (or an image) -> keywords -> one resolved video -> sink.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from .core.error import ErrorType, PageVideoError, log_error
from .models.schema import ResolvedResult, not_found
from .recognizer import TextRecognizer
from .retrievers.base import LookupClient
from .search.orchestrator import TieBreak, resolve
from .search.tokenizer import tokenize
from .sinks import ResultSink, SingleDeliverySink, deliver_result

logger = logging.getLogger("pagevideo.pipeline")


async def find_video(
    text: Optional[str],
    lookup: LookupClient,
    sink: Optional[ResultSink] = None,
    *,
    tie_break: Union[str, TieBreak] = TieBreak.FIRST_KEYWORD,
    lookup_timeout: Optional[float] = None,
) -> ResolvedResult:
    """
    Tokenize recognized text, resolve it to one video and deliver the result
    to `sink` exactly once.
    """
    keywords = tokenize(text)
    logger.info("Recognized text -> %d keyword(s)", len(keywords))
    result = await resolve(
        keywords,
        lookup,
        tie_break=tie_break,
        lookup_timeout=lookup_timeout,
    )
    if sink is not None:
        deliver_result(result, SingleDeliverySink(sink))
    return result


async def find_video_for_image(
    image_path: Union[str, Path],
    recognizer: TextRecognizer,
    lookup: LookupClient,
    sink: Optional[ResultSink] = None,
    *,
    tie_break: Union[str, TieBreak] = TieBreak.FIRST_KEYWORD,
    lookup_timeout: Optional[float] = None,
) -> ResolvedResult:
    """
    Recognize text in an image and resolve it. A recognition failure is logged
    and handled like an image without text.
    """
    loop = asyncio.get_event_loop()
    try:
        text = await loop.run_in_executor(None, recognizer.recognize, image_path)
    except PageVideoError as e:
        log_error(e, logger, context={"image_path": str(image_path)}, level="WARNING")
        result = not_found(diagnostic=ErrorType.EMPTY_RECOGNITION.value)
        if sink is not None:
            deliver_result(result, SingleDeliverySink(sink))
        return result
    return await find_video(
        text,
        lookup,
        sink,
        tie_break=tie_break,
        lookup_timeout=lookup_timeout,
    )
