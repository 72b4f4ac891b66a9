"""
AI-assisted candidate extraction and ranking.

Same output contract as the heuristic extractor, but the fields come from a
structured-extraction model call. Unlike the heuristic path this one raises:
network, configuration and reply-shape failures reach the caller, who decides
whether to fall back to extract_candidate_info().
"""

import json
import logging
from typing import Dict, List, Sequence

from pydantic import ValidationError

from resume_analyzer.ai.errors import AIExtractionError, AIResponseError
from resume_analyzer.ai.llm_client import StructuredLLMClient
from resume_analyzer.core.file_text_extractor import extract_text
from resume_analyzer.core.schemas import (
    CandidateInfo,
    CandidateProjection,
    CandidateRecord,
    ExtractionReply,
    RankingReply,
    RankingResult,
)

logger = logging.getLogger(__name__)

MAX_RANKED = 10

# Keys a model may echo back that must never land on a fresh record
ECHOED_IDENTIFIER_KEYS = ("id", "candidateId", "candidate_id", "resumeUrl", "resume_url", "status")

EXTRACTION_PROMPT = """Extract structured information from the resume text. Return a JSON object with these fields:
- name: Full name of the candidate
- email: Email address
- phone: Phone number
- degree: Highest degree obtained, one of "Bachelor", "Master", "PhD", "Associate", "High School"
- degreeField: Field of study
- yearsExperience: Total years of teaching/educational experience as a number
- hasCertifications: Boolean, true if they hold any teaching certification
- certifications: Teaching certifications held (CELTA, TEFL, TESOL, etc.) as a single string
- nativeEnglishSpeaker: Boolean, best guess whether they are a native English speaker
- militaryExperience: Boolean, true if they have military experience
- nationality: Nationality if stated
- notes: A brief summary of their key qualifications and fit for an English Language Training instructor position
Use null for anything the resume does not state."""

RANKING_PROMPT = """You are a recruitment assistant for English Language Training (ELT) instructors.
Rank the provided candidates and select the top 10.
Weigh these factors in descending order of importance:
1. Education (degrees in English, TESOL, Linguistics or Education rank highest)
2. Teaching experience (years, especially ESL/ELT)
3. Teaching certifications (CELTA, TEFL, TESOL)
4. Native English speaker status
5. Military experience
6. Assessment scores (grammar, vocabulary, classroom management, overall)

Return a JSON object with:
- "rankedCandidates": array of candidate ids, best first
- "rationale": brief explanation of the ranking and key differentiators"""


class AIExtractor:
    """AI-assisted extraction and ranking over an injected StructuredLLMClient."""

    def __init__(self, llm: StructuredLLMClient):
        self.llm = llm

    def extract(self, raw_text: str) -> CandidateInfo:
        """
        Extract a CandidateInfo from résumé text via the structured-extraction service.

        Raises:
            AIExtractionError: blank input
            AIResponseError: reply is not JSON or does not fit the candidate shape
        """
        if not raw_text or not raw_text.strip():
            raise AIExtractionError("No resume text to send for extraction")

        data = self.llm.chat_json(EXTRACTION_PROMPT, raw_text)
        for key in ECHOED_IDENTIFIER_KEYS:
            data.pop(key, None)

        try:
            reply = ExtractionReply.model_validate(data)
        except ValidationError as e:
            raise AIResponseError(f"Extraction reply does not match the candidate shape: {e}") from e

        candidate = reply.to_candidate()
        logger.info(f"AI extraction returned fields: {', '.join(sorted(candidate.to_record()))}")
        return candidate

    def extract_file(self, file_path: str) -> CandidateInfo:
        """Extract text locally (same decoders as the heuristic path), then extract()."""
        text = extract_text(file_path)
        if not text.strip():
            raise AIExtractionError(f"Could not extract any text from {file_path}")
        return self.extract(text)

    def rank_candidates(self, candidates: Sequence[CandidateRecord]) -> RankingResult:
        """
        Rank candidates with the ranking service.

        Ids the service returns that match no candidate are dropped, duplicates
        are kept once, service order is preserved, and at most 10 come back.
        """
        if not candidates:
            return RankingResult()

        projections = [CandidateProjection.from_record(c).model_dump(by_alias=True) for c in candidates]
        data = self.llm.chat_json(RANKING_PROMPT, json.dumps(projections))

        try:
            reply = RankingReply.model_validate(data)
        except ValidationError as e:
            raise AIResponseError(f"Ranking reply is malformed: {e}") from e

        by_id: Dict[int, CandidateRecord] = {c.id: c for c in candidates}
        ranked: List[CandidateRecord] = []
        seen = set()
        for candidate_id in reply.ranked_candidates:
            candidate = by_id.get(candidate_id)
            if candidate is None:
                logger.debug(f"Ranking reply referenced unknown candidate id {candidate_id}")
                continue
            if candidate_id in seen:
                continue
            seen.add(candidate_id)
            ranked.append(candidate)

        logger.info(f"Ranked {len(ranked)} of {len(candidates)} candidates (returning at most {MAX_RANKED})")
        return RankingResult(ranked=ranked[:MAX_RANKED], rationale=reply.rationale)


def extract_via_ai(raw_text: str, llm: StructuredLLMClient) -> CandidateInfo:
    return AIExtractor(llm).extract(raw_text)


def rank_candidates(candidates: Sequence[CandidateRecord], llm: StructuredLLMClient) -> RankingResult:
    return AIExtractor(llm).rank_candidates(candidates)
