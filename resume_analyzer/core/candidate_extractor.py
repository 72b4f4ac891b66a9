"""
Heuristic candidate-info extraction from résumé text.

Deterministic and dependency-free: regex and keyword rules only. Each field
parser runs independently; a parser that blows up is logged and its field left
absent, so extract_candidate_info() always returns a CandidateInfo.
"""

import logging
from typing import Any, Callable, Dict, Optional

from resume_analyzer.core.contact_parser import extract_email, extract_phone
from resume_analyzer.core.education_parser import extract_degree, extract_degree_field
from resume_analyzer.core.file_text_extractor import extract_text
from resume_analyzer.core.name_parser import extract_name
from resume_analyzer.core.qualification_parser import (
    extract_certifications,
    extract_nationality,
    extract_years_experience,
    has_military_experience,
    is_native_english_speaker,
)
from resume_analyzer.core.schemas import CandidateInfo
from resume_analyzer.core.text_normalization import AnalysisContext, build_context

logger = logging.getLogger(__name__)

KEY_FIELDS = ("name", "email", "phone", "degree")


def _safe(field_name: str, fn: Callable[[AnalysisContext], Any], ctx: AnalysisContext) -> Any:
    try:
        return fn(ctx)
    except Exception:
        logger.exception(f"Heuristic extraction of '{field_name}' failed; leaving it unset")
        return None


def extract_candidate_info(text: Optional[str], file_path: Optional[str] = None) -> CandidateInfo:
    """
    Pull structured candidate fields out of unstructured résumé text.

    Args:
        text: Raw résumé text (any whitespace layout)
        file_path: Originating file, only used to read a name out of the file name

    Returns:
        A CandidateInfo with status "new". Fields that could not be found are
        absent; has_certifications is always an explicit bool.
    """
    logger.debug("Using heuristic text pattern analysis")
    ctx = build_context(text, file_path=file_path)
    if not ctx.normalized:
        logger.warning("No text to analyze; returning empty candidate record")
        return CandidateInfo()

    fields: Dict[str, Any] = {}
    fields["email"] = _safe("email", extract_email, ctx)
    ctx.email = fields["email"]
    fields["phone"] = _safe("phone", extract_phone, ctx)
    fields["name"] = _safe("name", extract_name, ctx)
    fields["degree"] = _safe("degree", extract_degree, ctx)
    fields["degree_field"] = _safe("degree_field", extract_degree_field, ctx)
    fields["years_experience"] = _safe("years_experience", extract_years_experience, ctx)

    certs = _safe("certifications", extract_certifications, ctx)
    if certs:
        fields["has_certifications"], fields["certifications"] = certs

    fields["native_english_speaker"] = _safe("native_english_speaker", is_native_english_speaker, ctx)
    fields["military_experience"] = _safe("military_experience", has_military_experience, ctx)
    fields["nationality"] = _safe("nationality", extract_nationality, ctx)

    result = CandidateInfo(**{k: v for k, v in fields.items() if v is not None})

    found = [k for k, v in fields.items() if v not in (None, "", False)]
    key_count = sum(1 for k in KEY_FIELDS if k in found)
    logger.info(f"Heuristic extraction found {len(found)} fields ({key_count}/{len(KEY_FIELDS)} key fields): {', '.join(found) or 'none'}")
    return result


def analyze_resume_file(file_path: str) -> CandidateInfo:
    """Read a résumé file and run the heuristic extractor over its text."""
    text = extract_text(file_path)
    return extract_candidate_info(text, file_path=str(file_path))
