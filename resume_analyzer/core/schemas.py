import math
import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


DegreeLevel = Literal["Bachelor", "Master", "PhD", "Associate", "High School"]

DEFAULT_RATIONALE = "Candidates ranked based on qualifications."

_TRUE_STRINGS = {"true", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "no", "n", "0"}


class _CamelModel(BaseModel):
    """snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CandidateInfo(_CamelModel):
    name: Optional[str] = Field(default=None, description="Best-guess full name, title-cased, 2+ tokens")
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, description="Trimmed, whitespace-collapsed phone string")
    degree: Optional[DegreeLevel] = Field(default=None, description="Highest education tier matched")
    degree_field: Optional[str] = None  # English, Literature, Education, Linguistics or free text
    years_experience: Optional[int] = None
    has_certifications: bool = False
    certifications: Optional[str] = Field(default=None, description="Matched certification snippets joined by '; '")
    native_english_speaker: Optional[bool] = Field(default=None, description="True when declared, otherwise absent")
    military_experience: Optional[bool] = Field(default=None, description="True when found, otherwise absent")
    nationality: Optional[str] = None
    notes: Optional[str] = None
    resume_url: Optional[str] = None
    status: str = "new"

    def to_record(self) -> Dict[str, Any]:
        """camelCase dict with absent fields dropped."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CandidateRecord(CandidateInfo):
    """A stored candidate, as handed to the ranker."""
    id: int
    grammar_proficiency: Optional[int] = None
    vocabulary_proficiency: Optional[int] = None
    classroom_management: Optional[int] = None
    overall_score: Optional[int] = None


class CandidateProjection(_CamelModel):
    """Reduced view of a candidate sent for ranking. Carries no contact details."""
    id: int
    education: str
    years_experience: int = 0
    certifications: str = "None"
    has_certifications: bool = False
    native_english_speaker: Optional[bool] = None
    military_experience: Optional[bool] = None
    grammar_proficiency: int = 0
    vocabulary_proficiency: int = 0
    classroom_management: int = 0
    overall_score: int = 0
    status: str = "new"

    @classmethod
    def from_record(cls, record: CandidateRecord) -> "CandidateProjection":
        return cls(
            id=record.id,
            education=f"{record.degree or 'Unknown'} in {record.degree_field or 'Unknown'}",
            years_experience=record.years_experience or 0,
            certifications=record.certifications or "None",
            has_certifications=record.has_certifications,
            native_english_speaker=record.native_english_speaker,
            military_experience=record.military_experience,
            grammar_proficiency=record.grammar_proficiency or 0,
            vocabulary_proficiency=record.vocabulary_proficiency or 0,
            classroom_management=record.classroom_management or 0,
            overall_score=record.overall_score or 0,
            status=record.status,
        )


class RankingResult(BaseModel):
    ranked: List[CandidateRecord] = Field(default_factory=list, description="Best first, at most 10")
    rationale: str = DEFAULT_RATIONALE


# ============================================================================
# Service reply schemas
# ============================================================================

def _coerce_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_STRINGS:
            return True
        if v in _FALSE_STRINGS:
            return False
    return None


def _coerce_int(value: Any) -> int:
    """Numbers and numeric strings ("5", "5+", "5 years") -> int, else 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        m = re.match(r"\s*(\d+)", value)
        if m:
            return int(m.group(1))
    return 0


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        parts = [str(v).strip() for v in value if v is not None and str(v).strip()]
        return "; ".join(parts) or None
    text = str(value).strip()
    return text or None


def canonical_degree(value: Any) -> Optional[str]:
    """Map free-form degree names onto a DegreeLevel, or None."""
    if not isinstance(value, str):
        return None
    v = value.strip().lower()
    if not v:
        return None
    if re.search(r"ph\.?\s?d|doctor", v):
        return "PhD"
    if re.search(r"master|m\.?b\.?a|m\.a\.|m\.s\.|m\.ed", v):
        return "Master"
    if re.search(r"bachelor|b\.a\.|b\.s\.|undergraduate", v):
        return "Bachelor"
    if "associate" in v:
        return "Associate"
    if re.search(r"high school|secondary|diploma", v):
        return "High School"
    return None


class ExtractionReply(_CamelModel):
    """Structured-extraction reply. Every field optional; unknown keys ignored."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    degree: Optional[DegreeLevel] = None
    degree_field: Optional[str] = None
    years_experience: int = 0
    has_certifications: bool = False
    certifications: Optional[str] = None
    native_english_speaker: Optional[bool] = None
    military_experience: Optional[bool] = None
    nationality: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name", "email", "phone", "degree_field", "certifications", "nationality", "notes", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return _optional_text(v)

    @field_validator("degree", mode="before")
    @classmethod
    def _degree(cls, v: Any) -> Optional[str]:
        return canonical_degree(v)

    @field_validator("years_experience", mode="before")
    @classmethod
    def _years(cls, v: Any) -> int:
        return _coerce_int(v)

    @field_validator("has_certifications", mode="before")
    @classmethod
    def _has_certs(cls, v: Any) -> bool:
        return bool(_coerce_bool(v))

    @field_validator("native_english_speaker", "military_experience", mode="before")
    @classmethod
    def _flags(cls, v: Any) -> Optional[bool]:
        return _coerce_bool(v)

    def to_candidate(self) -> CandidateInfo:
        return CandidateInfo(**self.model_dump(), status="new")


class RankingReply(_CamelModel):
    ranked_candidates: List[int] = Field(default_factory=list)
    rationale: str = DEFAULT_RATIONALE

    @field_validator("ranked_candidates", mode="before")
    @classmethod
    def _ids(cls, v: Any) -> List[int]:
        if not isinstance(v, (list, tuple)):
            return []
        ids: List[int] = []
        for item in v:
            if isinstance(item, bool):
                continue
            if isinstance(item, int):
                ids.append(item)
            elif isinstance(item, str) and item.strip().isdigit():
                ids.append(int(item.strip()))
            elif isinstance(item, dict) and "id" in item:
                # {"id": 3, ...} entries
                nested = item["id"]
                if isinstance(nested, int) and not isinstance(nested, bool):
                    ids.append(nested)
                elif isinstance(nested, str) and nested.strip().isdigit():
                    ids.append(int(nested.strip()))
        return ids

    @field_validator("rationale", mode="before")
    @classmethod
    def _rationale(cls, v: Any) -> str:
        return _optional_text(v) or DEFAULT_RATIONALE
