"""
Teaching-qualification signals: years of experience, certifications,
native-speaker declaration, military background and nationality.

Native-speaker and military checks only ever report True; when nothing matches
the caller leaves the field absent rather than setting False.
"""

import re
from typing import List, Optional, Pattern, Tuple

from resume_analyzer.core.strategy import Strategy, run_chain
from resume_analyzer.core.text_normalization import AnalysisContext


# ===== YEARS OF EXPERIENCE =====

_YEARS = r"(?:years?|yrs?)"
_EXPERIENCE_KINDS = r"(?:(?:teaching|work|professional|industry|relevant)\s+)?experience"

EXPERIENCE_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    # 5+ years of teaching experience
    ("years_then_experience", re.compile(rf"(\d+)\+?\s*{_YEARS}(?:\s+of)?\s+{_EXPERIENCE_KINDS}", re.IGNORECASE)),
    # Experience: 5 years
    ("experience_then_years", re.compile(rf"experience\D*?(\d+)\+?\s*{_YEARS}", re.IGNORECASE)),
    # Professional experience ... 5 years
    ("qualified_experience_then_years", re.compile(rf"(?:professional|work|industry)\s+experience\D*?(\d+)\+?\s*{_YEARS}", re.IGNORECASE)),
]

MIN_YEARS_EXCLUSIVE = 0
MAX_YEARS_EXCLUSIVE = 50


def is_sane_years(years: int) -> bool:
    return MIN_YEARS_EXCLUSIVE < years < MAX_YEARS_EXCLUSIVE


def _years_strategy(pattern: Pattern[str]):
    def extract(ctx: AnalysisContext) -> Optional[int]:
        for m in pattern.finditer(ctx.normalized):
            years = int(m.group(1))
            if is_sane_years(years):
                return years
        return None
    return extract


YEARS_STRATEGIES = tuple(Strategy(name, _years_strategy(pattern)) for name, pattern in EXPERIENCE_PATTERNS)


def extract_years_experience(ctx: AnalysisContext) -> Optional[int]:
    hit = run_chain(YEARS_STRATEGIES, ctx, accept=is_sane_years, field_name="years_experience")
    return hit[1] if hit else None


# ===== CERTIFICATIONS =====

CERTIFICATION_PATTERNS: List[str] = [
    r"\b(?:tefl|tesol|celta|delta|teaching certification)\b",
    r"\bcertified\s+(?:english|language|esl|esol|efl)\s+(?:teacher|instructor)\b",
    r"\bcertificate\s+in\s+(?:english|language|teaching|tesol|tefl)\b",
]
CERTIFICATION_CONTEXT = 50
GENERIC_CERTIFICATION_TEXT = "TEFL/TESOL/CELTA certification mentioned"


def extract_certifications(ctx: AnalysisContext) -> Tuple[bool, Optional[str]]:
    """
    Returns (has_certifications, certifications_text).

    For each matching pattern, up to 50 characters either side of the first hit
    are kept as context; snippets are joined with "; ".
    """
    found = False
    snippets: List[str] = []
    for source in CERTIFICATION_PATTERNS:
        if not re.search(source, ctx.normalized, re.IGNORECASE):
            continue
        found = True
        m = re.search(rf".{{0,{CERTIFICATION_CONTEXT}}}(?:{source}).{{0,{CERTIFICATION_CONTEXT}}}", ctx.normalized, re.IGNORECASE)
        if m and m.group(0).strip():
            snippets.append(m.group(0).strip())
    if not found:
        return False, None
    return True, "; ".join(snippets) if snippets else GENERIC_CERTIFICATION_TEXT


# ===== NATIVE SPEAKER =====

NATIVE_SPEAKER_PATTERNS: List[Pattern[str]] = [
    re.compile(r"\bnative\s+(?:english|language)\s+speaker\b", re.IGNORECASE),
    re.compile(r"\benglish\s+(?:native|mother)\s+(?:speaker|tongue)\b", re.IGNORECASE),
    re.compile(r"\bfirst\s+language:?\s+english\b", re.IGNORECASE),
    re.compile(r"\bl1:?\s+english\b", re.IGNORECASE),
]


def is_native_english_speaker(ctx: AnalysisContext) -> Optional[bool]:
    if any(p.search(ctx.normalized) for p in NATIVE_SPEAKER_PATTERNS):
        return True
    return None


# ===== MILITARY =====

_BRANCHES = r"(?:military|army|navy|air force|marine|marines|coast guard|armed forces|national guard|defense force)"

MILITARY_PATTERNS: List[Pattern[str]] = [
    re.compile(rf"\b{_BRANCHES}\b", re.IGNORECASE),
    re.compile(r"\bveteran\b", re.IGNORECASE),
    re.compile(rf"\bserved\s+(?:in|with)\s+(?:the\s+)?{_BRANCHES}\b", re.IGNORECASE),
]


def has_military_experience(ctx: AnalysisContext) -> Optional[bool]:
    if any(p.search(ctx.normalized) for p in MILITARY_PATTERNS):
        return True
    return None


# ===== NATIONALITY =====

NATIONALITY_PATTERNS: List[Pattern[str]] = [
    re.compile(r"\bnationality\s*:\s*([A-Za-z][A-Za-z ]*[A-Za-z])", re.IGNORECASE | re.MULTILINE),
    re.compile(r"\bcitizenship\s*:\s*([A-Za-z][A-Za-z ]*[A-Za-z])", re.IGNORECASE | re.MULTILINE),
    re.compile(r"\bcitizen\s+of\s+(?:the\s+)?([A-Za-z][A-Za-z ]*[A-Za-z])", re.IGNORECASE | re.MULTILINE),
    re.compile(r"\bcountry\s+of\s+origin\s*:\s*([A-Za-z][A-Za-z ]*[A-Za-z])", re.IGNORECASE | re.MULTILINE),
]


def extract_nationality(ctx: AnalysisContext) -> Optional[str]:
    # Line-preserving text so the value ends at the line break
    for pattern in NATIONALITY_PATTERNS:
        m = pattern.search(ctx.layout)
        if m:
            value = m.group(1).strip()
            if 2 < len(value) < 30:
                return value
    return None
