"""
XSS sanitization for user supplied content.

- sanitize_text: plain-text fields (titles, names, labels). All markup goes,
  script/style bodies included; leftover angle brackets are escaped.
- sanitize_html: rich blog content. Markup is kept, dangerous elements,
  event handler attributes and script-capable URLs are removed.
- normalize_slug: lowercase slug restricted to [a-z0-9-].
"""
import re
from enum import Enum
from typing import Any, Optional

from bs4 import BeautifulSoup

# Elements whose body is code, never readable text
NON_TEXT_TAGS = ["script", "style", "noscript", "template"]

DANGEROUS_TAGS = ["script", "iframe", "object", "embed", "link", "meta", "style"]
URL_ATTRIBUTES = {"href", "src", "action", "formaction", "xlink:href"}
UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:")

_SLUG_INVALID = re.compile(r"[^a-z0-9-]")
_URL_NOISE = re.compile(r"[\s\x00-\x1f]+")


def sanitize_text(value: Any) -> str:
    if not value or not isinstance(value, str):
        return ""

    soup = BeautifulSoup(value, "html.parser")
    for tag in soup.find_all(NON_TEXT_TAGS):
        tag.decompose()

    text = soup.get_text()
    return text.replace("<", "&lt;").replace(">", "&gt;").strip()


def _is_unsafe_url(value: Any) -> bool:
    if isinstance(value, list):
        value = " ".join(value)
    if not isinstance(value, str):
        return False
    # Browsers ignore embedded whitespace/control chars in the scheme
    compact = _URL_NOISE.sub("", value).lower()
    return compact.startswith(UNSAFE_SCHEMES)


def sanitize_html(value: Any) -> str:
    if not value or not isinstance(value, str):
        return ""

    soup = BeautifulSoup(value, "html.parser")
    for tag in soup.find_all(DANGEROUS_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        for attr in list(tag.attrs):
            name = attr.lower()
            if name.startswith("on"):
                del tag.attrs[attr]
            elif name in URL_ATTRIBUTES and _is_unsafe_url(tag.attrs[attr]):
                del tag.attrs[attr]

    return str(soup)


def normalize_slug(value: Any) -> str:
    return _SLUG_INVALID.sub("-", sanitize_text(value).lower())


def slugify(value: str) -> str:
    """Derive a slug from a title: runs of invalid characters collapse to one dash."""
    slug = normalize_slug(value)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def _sanitize_mapping(mapping: dict) -> dict:
    cleaned = {}
    for key, item in mapping.items():
        if isinstance(item, str):
            cleaned[key] = sanitize_text(item)
        elif isinstance(item, dict):
            cleaned[key] = _sanitize_mapping(item)
        elif isinstance(item, list):
            cleaned[key] = [sanitize_document(i) for i in item]
        else:
            cleaned[key] = item
    return cleaned


class ContentKind(str, Enum):
    """Shapes an investment card section's content can take."""

    TEXT = "text"
    TEXT_LIST = "textList"
    OBJECT_LIST = "objectList"
    OBJECT = "object"


def classify_content(content: Any) -> Optional[ContentKind]:
    if isinstance(content, str):
        return ContentKind.TEXT
    if isinstance(content, dict):
        return ContentKind.OBJECT
    if isinstance(content, list):
        if all(isinstance(item, str) for item in content):
            return ContentKind.TEXT_LIST
        if all(isinstance(item, dict) for item in content):
            return ContentKind.OBJECT_LIST
    return None


def sanitize_section_content(content: Any) -> Any:
    """Sanitize investment card section content according to its kind."""
    kind = classify_content(content)
    if kind is ContentKind.TEXT:
        return sanitize_text(content)
    if kind is ContentKind.TEXT_LIST:
        return [sanitize_text(item) for item in content]
    if kind is ContentKind.OBJECT_LIST:
        return [_sanitize_mapping(item) for item in content]
    if kind is ContentKind.OBJECT:
        return _sanitize_mapping(content)
    return content


def sanitize_document(value: Any) -> Any:
    """Apply sanitize_text to every string inside a JSON-like value."""
    if isinstance(value, str):
        return sanitize_text(value)
    if isinstance(value, list):
        return [sanitize_document(item) for item in value]
    if isinstance(value, dict):
        return _sanitize_mapping(value)
    return value
