"""
Candidate name extraction.

Priority chain, first success wins:
1. file name (unless it looks auto-generated, e.g. Resume202504170332.pdf)
2. "Name:" label inside a personal-information / contact section
3. shape patterns over the first 10 lines
4. the same patterns over the whole document
5. any capitalized multi-word run in the first 400 characters

Every candidate must be longer than 3 characters and have at least two tokens.
"""

import os
import re
from typing import List, Optional, Pattern

from resume_analyzer.core.strategy import Strategy, run_chain
from resume_analyzer.core.text_normalization import AnalysisContext, split_camel_case, title_case_name


# One capitalized word or an initial; tokens separated by spaces/tabs only so a
# name never spans two lines.
_LABEL_WORDS = r"(?:E-?mail|Phone|Tel|Telephone|Mobile|Cell|Address|Contact|Date|Nationality|Gender|Objective|Summary)\b"
_NAME_WORD = rf"(?!{_LABEL_WORDS})[A-Z][A-Za-z'’\-]+"
_NAME_TOKEN = rf"(?:{_NAME_WORD}|[A-Z]\.)"
NAME = rf"{_NAME_WORD}(?:[ \t]+{_NAME_TOKEN}){{1,3}}"

# Vocabulary that marks a capitalized run as a heading rather than a person
HEADER_VOCABULARY = {
    "resume", "résumé", "curriculum", "vitae", "cv", "education", "contact", "profile",
    "experience", "objective", "summary", "university", "college",
}

# Words that trail the name in file names ("Jane_Doe_English_Teacher_final").
# Only stripped from the end, and never below two tokens, so "Tom_English" stays.
FILENAME_FILLER = {"final", "updated", "copy", "new", "draft", "english", "teacher"}

AUTO_FILENAME_RE = re.compile(
    r"^(?:resume|cv|document|file|scan|upload)?[\s_\-]*[\d_\-\s]+$|\d{8,}|\d{4}[-_]\d{2}[-_]\d{2}",
    re.IGNORECASE,
)
# Case-sensitive so "Cvetkova_Anna" keeps its "Cv"
FILENAME_PREFIX_RE = re.compile(r"^(?:\d+[-_])?(?:[Rr]esume|RESUME|CV|cv|Cv)(?:[_\-\s]+|(?=[A-Z])|$)")

PERSONAL_SECTION_RE = re.compile(
    r"\b(?:personal\s+(?:information|details|data)|contact\s+information|contact)\b",
    re.IGNORECASE,
)
SECTION_NAME_RE = re.compile(rf"(?i:full\s+name|name)\s*:\s*({NAME})")

TOP_LINE_LIMIT = 10
SECTION_WINDOW = 300
FALLBACK_WINDOW = 400

CAPITALIZED_RUN_RE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")


def is_plausible_name(value: str) -> bool:
    return len(value) > 3 and len(value.split()) >= 2


def looks_like_header(value: str) -> bool:
    return any(w.lower().strip(".,:;") in HEADER_VOCABULARY for w in value.split())


def _accept(value: str) -> bool:
    return is_plausible_name(value) and not looks_like_header(value)


# ============================================================================
# Step 1: file name
# ============================================================================

def is_auto_generated_filename(stem: str) -> bool:
    return bool(AUTO_FILENAME_RE.search(stem))


def name_from_filename(file_path: str) -> Optional[str]:
    """
    Read a name out of a résumé file name.

    Examples:
    - "Resume_Jane_Doe.pdf" -> "Jane Doe"
    - "JaneDoeResume.docx" -> "Jane Doe"
    - "Jane_Doe_English_Teacher.pdf" -> "Jane Doe"
    - "Resume_Tom_English.pdf" -> "Tom English"
    - "Resume202504170332.pdf" -> None (auto-generated)
    """
    stem = os.path.splitext(os.path.basename(file_path))[0]
    if not stem or is_auto_generated_filename(stem):
        return None
    stem = FILENAME_PREFIX_RE.sub("", stem)
    stem = split_camel_case(stem)
    stem = re.sub(r"[_\-.]+", " ", stem)
    tokens = [t for t in stem.split() if t.isalpha() and t.lower() not in HEADER_VOCABULARY]
    while len(tokens) > 2 and tokens[-1].lower() in FILENAME_FILLER:
        tokens.pop()
    if len(tokens) < 2:
        return None
    return " ".join(t[:1].upper() + t[1:].lower() for t in tokens)


def _from_filename(ctx: AnalysisContext) -> Optional[str]:
    return name_from_filename(ctx.file_path or "")


# ============================================================================
# Step 2: personal-information section
# ============================================================================

def _from_personal_section(ctx: AnalysisContext) -> Optional[str]:
    for header in PERSONAL_SECTION_RE.finditer(ctx.normalized):
        window = ctx.normalized[header.end():header.end() + SECTION_WINDOW]
        m = SECTION_NAME_RE.search(window)
        if m and _accept(m.group(1).strip()):
            return m.group(1).strip()
    return None


# ============================================================================
# Steps 3-4: shape patterns
# ============================================================================

SHAPE_PATTERNS: List[Pattern[str]] = [
    # Resume of Jane Doe / CV for: Jane Doe
    re.compile(rf"(?i:resume|cv|curriculum\s+vitae)[ \t]+(?i:of|for)[ \t]*:?[ \t]*({NAME})"),
    # Name: Jane Doe / Candidate: Jane Doe
    re.compile(rf"(?i:full\s+name|name|candidate)[ \t]*:[ \t]*({NAME})"),
    # a line holding nothing but the name
    re.compile(rf"^[ \t]*({NAME})[ \t]*$", re.MULTILINE),
    # name closing a line
    re.compile(rf"({NAME})[ \t]*\n"),
    # name shortly followed by contact details
    re.compile(rf"({NAME})[^A-Za-z0-9\n]{{1,20}}(?i:e-?mail|phone|tel|mobile|address|contact)"),
    # generic: one or two capitalized words plus another
    re.compile(r"\b([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){1,2})\b"),
]


def _near_email_patterns(email: str) -> List[Pattern[str]]:
    e = re.escape(email)
    return [
        re.compile(rf"({NAME})[^A-Za-z0-9\n]{{1,10}}{e}"),
        re.compile(rf"{e}[^A-Za-z0-9\n]{{1,10}}({NAME})"),
    ]


def _first_shape_match(text: str, email: Optional[str]) -> Optional[str]:
    patterns = list(SHAPE_PATTERNS)
    if email:
        patterns += _near_email_patterns(email)
    for pattern in patterns:
        for m in pattern.finditer(text):
            candidate = m.group(1).strip()
            if _accept(candidate):
                return candidate
    return None


def _from_top_lines(ctx: AnalysisContext) -> Optional[str]:
    return _first_shape_match(ctx.head(TOP_LINE_LIMIT), ctx.email)


def _from_whole_document(ctx: AnalysisContext) -> Optional[str]:
    return _first_shape_match(ctx.layout, ctx.email)


# ============================================================================
# Step 5: capitalized runs near the top
# ============================================================================

def _from_capitalized_runs(ctx: AnalysisContext) -> Optional[str]:
    runs = [r for r in CAPITALIZED_RUN_RE.findall(ctx.normalized[:FALLBACK_WINDOW]) if is_plausible_name(r)]
    if not runs:
        return None
    filtered = [r for r in runs if not looks_like_header(r)]
    return filtered[0] if filtered else runs[0]


NAME_STRATEGIES = (
    Strategy("filename", _from_filename, applies=lambda ctx: bool(ctx.file_path)),
    Strategy("personal_section", _from_personal_section),
    Strategy("top_lines", _from_top_lines),
    Strategy("whole_document", _from_whole_document),
    Strategy("capitalized_run", _from_capitalized_runs),
)


def extract_name(ctx: AnalysisContext) -> Optional[str]:
    hit = run_chain(NAME_STRATEGIES, ctx, accept=is_plausible_name, field_name="name")
    return title_case_name(hit[1]) if hit else None
