"""
Education parsing: highest degree tier and degree field.

Deterministic keyword rules. The degree tier is looked for in the education
section first (the 200 characters after the first education-like header) and
then across the whole document. Tiers are tested in a fixed order, so a
document mentioning both a bachelor's and a master's reports "Bachelor"
unless only the master's sits in the education section.
"""

import re
from typing import List, Optional, Pattern, Tuple

from resume_analyzer.core.text_normalization import AnalysisContext


# Letters on either side would mean the abbreviation is part of a longer word
_NL = r"(?<![a-z])"
_NR = r"(?![a-z])"

# ===== DEGREE TIERS (tested in this order) =====

DEGREE_TIERS: List[Tuple[str, Pattern[str]]] = [
    ("Bachelor", re.compile(
        rf"{_NL}(?:bachelor(?:['’]?s)?|b\.\s?a\.?|b\.\s?s\.?|b\.\s?sc\.?|bsc|b\.\s?ed\.?|undergraduate){_NR}"
    )),
    ("Master", re.compile(
        rf"{_NL}(?:master(?:['’]?s)?|m\.\s?a\.?|m\.\s?s\.?|m\.\s?sc\.?|msc|m\.?b\.?a\.?|m\.\s?ed\.?|postgraduate|graduate\s+degree){_NR}"
    )),
    ("PhD", re.compile(
        rf"{_NL}(?:ph\.?\s?d\.?|doctorate|doctoral|doctor\s+of|d\.\s?phil\.?){_NR}"
    )),
    ("Associate", re.compile(
        rf"{_NL}(?:associate(?:['’]?s)?\s+(?:degree|of|in)|a\.\s?a\.?|a\.\s?s\.?){_NR}"
    )),
    ("High School", re.compile(
        rf"{_NL}(?:high\s+school|secondary\s+(?:school|education)|diploma){_NR}"
    )),
]

EDUCATION_HEADER_RE = re.compile(r"\b(?:education|academic|qualifications?|degrees?)\b", re.IGNORECASE)
EDUCATION_WINDOW = 200

# ===== DEGREE FIELD =====

# Capture stops at '.', ',', newline, "from", or end of line
_FIELD_CAPTURE = r"([A-Za-z][A-Za-z ]*?)[ ]*(?=[.,\n]|\bfrom\b|$)"

FIELD_PATTERNS: List[Pattern[str]] = [
    re.compile(
        rf"\b(?:degree|major|concentration|specialization)[ ]*(?:in\b|:)?[ ]*{_FIELD_CAPTURE}",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(
        r"(?<![a-z])(?:bachelor|master|phd|ph\.d\.|doctorate|b\.a\.|b\.s\.|m\.a\.|m\.s\.|m\.b\.a\.)(?:['’]?s)?"
        r"(?:[ ]+of[ ]+(?:arts|science|education))?"
        rf"[ ]*(?:in\b|of\b|:)[ ]*{_FIELD_CAPTURE}",
        re.IGNORECASE | re.MULTILINE,
    ),
]

# Fallback when no explicit field phrase was found
COMMON_FIELDS: List[Tuple[str, Pattern[str]]] = [
    ("English", re.compile(r"\b(?:english|tesl|tesol|linguistics|language teaching)\b")),
    ("Literature", re.compile(r"\b(?:literature|literary studies)\b")),
    ("Education", re.compile(r"\b(?:education|teaching|instructional design)\b")),
    ("Linguistics", re.compile(r"\b(?:applied linguistics|language acquisition)\b")),
]

_FIELD_STOPWORDS = {"in", "of", "the", "a", "an", "and"}


def match_degree_tier(lowercase_text: str) -> Optional[str]:
    """First tier (Bachelor, Master, PhD, Associate, High School) found in the text."""
    for tier, pattern in DEGREE_TIERS:
        if pattern.search(lowercase_text):
            return tier
    return None


def education_section(ctx: AnalysisContext) -> Optional[str]:
    m = EDUCATION_HEADER_RE.search(ctx.normalized)
    if not m:
        return None
    return ctx.normalized[m.end():m.end() + EDUCATION_WINDOW]


def extract_degree(ctx: AnalysisContext) -> Optional[str]:
    section = education_section(ctx)
    if section:
        tier = match_degree_tier(section.lower())
        if tier:
            return tier
    return match_degree_tier(ctx.lowercase)


def _clean_field(value: str) -> Optional[str]:
    words = value.split()
    while words and words[-1].lower() in _FIELD_STOPWORDS:
        words.pop()
    while words and words[0].lower() in _FIELD_STOPWORDS:
        words.pop(0)
    field = " ".join(words)
    return field if len(field) > 1 else None


def extract_degree_field(ctx: AnalysisContext) -> Optional[str]:
    """
    Subject area of the degree.

    Examples:
    - "Master's degree in English" -> "English"
    - "B.A. in Applied Linguistics, 2012" -> "Applied Linguistics"
    - "... TESOL certificate ..." (no field phrase) -> "English"
    """
    for pattern in FIELD_PATTERNS:
        for m in pattern.finditer(ctx.layout):
            field = _clean_field(m.group(1))
            if field:
                return field
    for value, pattern in COMMON_FIELDS:
        if pattern.search(ctx.lowercase):
            return value
    return None
