"""
Text recognition adapters: image -> recognized text.
"""
import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from .core.config import get_ocr_language
from .core.error import ErrorType, PageVideoError

logger = logging.getLogger("pagevideo.recognizer")


class TextRecognizer(Protocol):
    def recognize(self, image_path: Union[str, Path]) -> str:
        ...


class TesseractRecognizer:
    """
    OCR through the tesseract engine (pytesseract + Pillow, `ocr` extra).

    Recognized lines are joined with single spaces. An image with no readable
    text yields "".
    """

    def __init__(self, lang: Optional[str] = None) -> None:
        self.lang = lang or get_ocr_language()

    def recognize(self, image_path: Union[str, Path]) -> str:
        try:
            import pytesseract
            from PIL import Image
        except ImportError as exc:
            raise PageVideoError(
                "OCR not available. Install with: pip install 'pagevideo-server[ocr]'",
                ErrorType.INVALID_PARAMS,
            ) from exc

        path = Path(image_path)
        if not path.is_file():
            raise PageVideoError(f"Image not found: {path}", ErrorType.INVALID_PARAMS, {"path": str(path)})

        try:
            with Image.open(path) as image:
                raw = pytesseract.image_to_string(image, lang=self.lang)
        except Exception as exc:
            raise PageVideoError(
                f"Text recognition failed for {path}: {exc}",
                ErrorType.INVALID_PARAMS,
                {"path": str(path)},
            ) from exc

        lines = [line.strip() for line in raw.splitlines() if line.strip()]
        text = " ".join(lines)
        logger.info("Recognized %d line(s) from %s", len(lines), path.name)
        return text
