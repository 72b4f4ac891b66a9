"""
Email and phone extraction.

Phones are found with a labeled-value pass first ("Phone: ...", "Mobile ..."),
then a series of number shapes from most to least specific. Shape matches that
cannot be real numbers (fewer than 7 digits, all zeros, all ones) are skipped.
"""

import re
from typing import List, Optional, Pattern

from resume_analyzer.core.strategy import Strategy, run_chain
from resume_analyzer.core.text_normalization import AnalysisContext, digits_only, normalize_phone


EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

LABELED_PHONE_RE = re.compile(
    r"\b(?:telephone|phone|mobile|cell|tel)(?:\s*number\b|\s*:|\s)\s*:?\s*([+\d()\s.\-]{7,25})",
    re.IGNORECASE,
)

PHONE_SHAPES: List[Pattern[str]] = [
    # (555) 123-4567, 555-123-4567, 555.123.4567
    re.compile(r"\(\d{3}\)\s?\d{3}[-.\s]?\d{4}\b|\b\d{3}[-.]\d{3}[-.]\d{4}\b"),
    # 5551234567
    re.compile(r"\b\d{10}\b"),
    # +966501234567, +44 7911123456
    re.compile(r"\+\d{1,3}\s?\d{9,15}\b"),
    # +1 (555) 123 4567
    re.compile(r"\+\d{1,3}\s?\(\d{1,4}\)\s?\d[\d\s.\-]{5,14}\d"),
    # +44 20 7946 0958, 0044 20 7946 0958
    re.compile(r"(?:\+|\b00)\d{1,3}[\s.\-]?\d{1,4}[\s.\-]?\d{3,4}[\s.\-]?\d{3,4}\b"),
    # 055 012 3456, 12 34 56 78 (space-separated only, so dates never match)
    re.compile(r"\b\d{2,4}(?:\s\d{2,4}){2,4}\b"),
]


def is_plausible_phone(value: str) -> bool:
    digits = digits_only(value)
    if len(digits) < 7:
        return False
    if set(digits) == {"0"} or set(digits) == {"1"}:
        return False
    return True


def extract_email(ctx: AnalysisContext) -> Optional[str]:
    """First address in the text wins."""
    m = EMAIL_RE.search(ctx.normalized)
    return m.group(0) if m else None


def _labeled_phone(ctx: AnalysisContext) -> Optional[str]:
    for m in LABELED_PHONE_RE.finditer(ctx.normalized):
        value = normalize_phone(m.group(1))
        if is_plausible_phone(value):
            return value
    return None


def _shape_strategy(pattern: Pattern[str]):
    def extract(ctx: AnalysisContext) -> Optional[str]:
        for m in pattern.finditer(ctx.normalized):
            if is_plausible_phone(m.group(0)):
                return normalize_phone(m.group(0))
        return None
    return extract


PHONE_STRATEGIES = (
    Strategy("labeled", _labeled_phone),
    Strategy("north_american", _shape_strategy(PHONE_SHAPES[0])),
    Strategy("ten_digits", _shape_strategy(PHONE_SHAPES[1])),
    Strategy("international", _shape_strategy(PHONE_SHAPES[2])),
    Strategy("international_area_code", _shape_strategy(PHONE_SHAPES[3])),
    Strategy("country_code_groups", _shape_strategy(PHONE_SHAPES[4])),
    Strategy("spaced_groups", _shape_strategy(PHONE_SHAPES[5])),
)


def extract_phone(ctx: AnalysisContext) -> Optional[str]:
    hit = run_chain(PHONE_STRATEGIES, ctx, accept=lambda v: bool(v), field_name="phone")
    return hit[1] if hit else None
