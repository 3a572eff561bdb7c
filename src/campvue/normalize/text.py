"""String cleanup helpers shared by the normalizers.

RIDB text is inconsistent: upper-case names, ``\\u003C``-escaped HTML in
descriptions, zero-padded site numbers. These helpers turn it into display
or machine friendly strings.
"""

from __future__ import annotations

import html
import math
import re
import unicodedata

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")
_WORD_START = re.compile(r"\b\w")
_SMART_CAPS = re.compile(r"^([a-z])|(')([a-z])")

_RIDB_ESCAPES = {r"\u003c": "<", r"\u003e": ">", r"\u0026": "&"}
_RIDB_ESCAPE_RE = re.compile(r"\\u00(?:3c|3e|26)", re.IGNORECASE)

_CAMPGROUND_TOKENS = re.compile(
    r"\b(?:camp\s*ground|campgrounds?|cg|cmpg|cmpgd|campgrnd|campg?d)\b", re.IGNORECASE
)
_TRAILING_QUALIFIER = re.compile(r"\b(?:area|park)\b\s*$", re.IGNORECASE)
ACRONYMS = frozenset({"RV", "BLM", "NPS", "USFS", "BIA"})

EMBEDDING_MAX_CHARS = 4000

_BLOCK_TAGS = ["p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6"]


# =============================================================================
# Casing
# =============================================================================


def title_case(text: str) -> str:
    """Lowercase, then capitalize the first character of every word."""
    return _WORD_START.sub(lambda m: m.group(0).upper(), text.lower())


def _smart_cap(part: str) -> str:
    return _SMART_CAPS.sub(
        lambda m: m.group(1).upper() if m.group(1) else m.group(2) + m.group(3).upper(),
        part.lower(),
    )


def smart_title_case(text: str) -> str:
    """Title-case that respects hyphens and apostrophes.

    ``"fish creek"`` -> ``"Fish Creek"``, ``"o'neill"`` -> ``"O'Neill"``,
    ``"east-west"`` -> ``"East-West"``.
    """
    words = []
    for word in text.split():
        parts = re.split(r"(-)", word)
        words.append("".join(p if p == "-" else _smart_cap(p) for p in parts))
    return " ".join(words)


# =============================================================================
# Names
# =============================================================================


def normalize_campground_name(raw: str) -> str:
    """Turn a RIDB facility name into a clean display label.

    Drops "campground" tokens (and common abbreviations), a trailing
    "area"/"park", separators and parentheses, then title-cases the rest
    while keeping agency acronyms upper-case.

    >>> normalize_campground_name("FISH CREEK CAMPGROUND")
    'Fish Creek'
    """
    if not raw:
        return ""

    s = _WHITESPACE.sub(" ", unicodedata.normalize("NFC", raw)).strip()
    s = re.sub(r"[–—]", "-", s)
    s = re.sub(r"\s*[-/|]\s*", " ", s)
    s = s.replace(",", " ").replace("(", "").replace(")", "")
    s = _WHITESPACE.sub(" ", s).strip()

    s = _WHITESPACE.sub(" ", _CAMPGROUND_TOKENS.sub(" ", s)).strip()
    s = _TRAILING_QUALIFIER.sub("", s).strip()

    s = smart_title_case(s)
    return " ".join(w.upper() if w.upper() in ACRONYMS else w for w in s.split())


def normalize_park_type(park: str | None) -> str | None:
    if not park:
        return None
    name = park.lower()
    if "national forest" in name:
        return "national forest"
    if "national monument" in name:
        return "national monument"
    if "national park" in name:
        return "national"
    return None


def normalize_site_number(site_number: str) -> str:
    """Canonical site number: alphanumerics only, upper-case, no zero padding.

    ``"007"`` -> ``"7"``, ``"a-01"`` -> ``"A1"``
    """
    alphanumeric = re.sub(r"[^A-Z0-9]", "", str(site_number).strip().upper())
    return re.sub(r"\d+", lambda m: str(int(m.group(0))), alphanumeric)


def normalize_coordinate(value: float | str | None, decimals: int = 7) -> float | None:
    """Parse a coordinate, rounding only when it carries ``decimals`` or more digits."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        num = float(text)
    except ValueError:
        return None
    if not math.isfinite(num):
        return None

    match = re.fullmatch(r"-?\d+(?:\.(\d+))?", text)
    frac_len = len(match.group(1)) if match and match.group(1) else 0
    if frac_len >= decimals:
        return round(num, decimals)
    return num


# =============================================================================
# HTML
# =============================================================================


def decode_html_entities(raw: str) -> str:
    """Decode RIDB's ``\\u003C``-style escapes plus named/numeric HTML entities."""
    if not raw:
        return ""
    s = _RIDB_ESCAPE_RE.sub(lambda m: _RIDB_ESCAPES[m.group(0).lower()], raw)
    return html.unescape(s).replace("\xa0", " ")


def html_to_text(raw: str | None) -> str:
    """Convert (often messy) RIDB HTML into plain text with paragraph breaks."""
    if not raw:
        return ""

    soup = BeautifulSoup(decode_html_entities(raw), "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    for tag in soup.find_all(["br", "hr"]):
        tag.replace_with("\n")
    for tag in soup.find_all(_BLOCK_TAGS):
        tag.append("\n")

    text = soup.get_text().replace("\r", "").replace("\xa0", " ")
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\s*\n\s*", "\n", text)
    return text.strip()


def to_embedding_text(raw: str | None, max_chars: int = EMBEDDING_MAX_CHARS) -> str:
    """Single-line plain text, capped at ``max_chars``, for embedding pipelines."""
    text = _WHITESPACE.sub(" ", html_to_text(raw)).strip()
    return text[:max_chars]
