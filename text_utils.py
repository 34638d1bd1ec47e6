"""Input clean-up: pictograph stripping, whitespace collapsing, sentence splitting."""
import re as _re
from typing import List

import regex

from log import get_logger

logger = get_logger("kotoba.text")

_NARROW_PICTOGRAPH_PATTERN = r"[\U0001F300-\U0001FAFF]"


def _compile_pictograph_pattern():
    try:
        return regex.compile(r"[\p{Extended_Pictographic}\p{Emoji_Presentation}]")
    except regex.error:
        logger.warning("Unicode property classes unsupported, using emoji block range",
                       extra={"component": "text"})
        return regex.compile(_NARROW_PICTOGRAPH_PATTERN)


_PICTOGRAPHS = _compile_pictograph_pattern()
_CR_TAB = _re.compile(r"[\r\t]+")
_MULTI_SPACE = _re.compile(r"\s{2,}")
_TERMINATORS = _re.compile(r"[。！!？?]+")


def normalize(text) -> str:
    """Strip pictographs/emoji and collapse whitespace.

    Trimming happens last so that whitespace left behind by a removed emoji
    never survives at either end.
    """
    if text is None:
        return ""
    cleaned = _PICTOGRAPHS.sub("", str(text).strip())
    cleaned = _CR_TAB.sub(" ", cleaned)
    cleaned = _MULTI_SPACE.sub(" ", cleaned)
    return cleaned.strip()


def split_sentences(text: str) -> List[str]:
    parts = _TERMINATORS.split(text or "")
    return [s.strip() for s in parts if s.strip()]
