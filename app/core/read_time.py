"""Reading time estimate for blog content."""
import math
import re

from bs4 import BeautifulSoup

WORDS_PER_MINUTE = 200
MIN_READ_TIME = 1
MAX_READ_TIME = 120

_WHITESPACE = re.compile(r"\s+")


def count_words(content: str) -> int:
    if not content:
        return 0
    text = BeautifulSoup(content, "html.parser").get_text(" ")
    text = _WHITESPACE.sub(" ", text).strip()
    if not text:
        return 0
    return len(text.split(" "))


def estimate_read_time(content: str) -> int:
    """Minutes to read ``content`` at 200 words per minute, clamped to 1..120."""
    minutes = math.ceil(count_words(content) / WORDS_PER_MINUTE)
    return max(MIN_READ_TIME, min(MAX_READ_TIME, minutes))
