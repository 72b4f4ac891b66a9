"""
Text normalization utilities shared by the heuristic field parsers.

Every parser works off an AnalysisContext, which holds three views of the same
résumé text:
- normalized: whitespace fully collapsed, used for most pattern matching
- lowercase: normalized, lowercased, for keyword tests
- layout: whitespace collapsed inside each line but line breaks kept, for
  patterns that care about line boundaries (top-of-document name lines, values
  terminated by a newline)
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional


# C0 control characters except tab/newline/carriage return. Raw-read Word files
# are full of these.
CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
WHITESPACE_RE = re.compile(r"\s+")
INLINE_WHITESPACE_RE = re.compile(r"[^\S\n]+")
CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")

# Characters that may pad a phone number but are not part of it
PHONE_EDGE_CHARS = " -./|,;:"


@dataclass
class AnalysisContext:
    text: str
    normalized: str
    lowercase: str
    layout: str
    lines: List[str] = field(default_factory=list)
    file_path: Optional[str] = None
    email: Optional[str] = None

    def head(self, max_lines: int = 10) -> str:
        """First few non-empty lines, newline-joined."""
        return "\n".join(self.lines[:max_lines])


def strip_control_chars(text: str) -> str:
    return CONTROL_CHARS_RE.sub(" ", text)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run (newlines included) to one space and trim."""
    return WHITESPACE_RE.sub(" ", text).strip()


def layout_lines(text: str) -> List[str]:
    """Non-empty lines with inner whitespace collapsed."""
    out: List[str] = []
    for raw in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        line = INLINE_WHITESPACE_RE.sub(" ", raw).strip()
        if line:
            out.append(line)
    return out


def build_context(text: Optional[str], file_path: Optional[str] = None) -> AnalysisContext:
    cleaned = strip_control_chars(text or "")
    normalized = collapse_whitespace(cleaned)
    lines = layout_lines(cleaned)
    return AnalysisContext(
        text=text or "",
        normalized=normalized,
        lowercase=normalized.lower(),
        layout="\n".join(lines),
        lines=lines,
        file_path=file_path,
    )


def split_camel_case(text: str) -> str:
    """JaneDoe -> Jane Doe"""
    return CAMEL_BOUNDARY_RE.sub(r"\1 \2", text)


def _title_word(word: str) -> str:
    # Initials ("Q.") and mixed-case words ("McDonald") are kept as written
    if len(word) <= 2 and word.endswith("."):
        return word.upper()
    if word.isupper() or word.islower():
        return "-".join(p[:1].upper() + p[1:].lower() for p in word.split("-"))
    return word


def title_case_name(name: str) -> str:
    """
    Title-case a person name token by token.

    Examples:
    - "JOHN DOE" -> "John Doe"
    - "jane smith-jones" -> "Jane Smith-Jones"
    - "John Q. Smith" -> "John Q. Smith" (unchanged)
    """
    return " ".join(_title_word(w) for w in name.split())


def digits_only(text: str) -> str:
    return re.sub(r"\D", "", text)


def normalize_phone(raw: str) -> str:
    """Trim, collapse inner whitespace, and strip separator characters off both ends."""
    phone = collapse_whitespace(raw)
    return phone.strip(PHONE_EDGE_CHARS)
