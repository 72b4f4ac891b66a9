"""
AI-assisted extraction and ranking, against a mocked OpenAI client.
"""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from resume_analyzer.ai.errors import AIConfigurationError, AIExtractionError, AIResponseError
from resume_analyzer.ai.extraction import AIExtractor, MAX_RANKED, extract_via_ai, rank_candidates
from resume_analyzer.ai.llm_client import StructuredLLMClient
from resume_analyzer.core.schemas import DEFAULT_RATIONALE, CandidateRecord


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _mock_client(reply):
    client = MagicMock()
    content = reply if isinstance(reply, str) else json.dumps(reply)
    client.chat.completions.create.return_value = _completion(content)
    return client


def _llm(reply):
    return StructuredLLMClient(client=_mock_client(reply), model="gpt-test")


def _sent_user_content(llm):
    kwargs = llm.client.chat.completions.create.call_args.kwargs
    return kwargs["messages"][1]["content"]


class TestExtraction:
    def test_reply_is_coerced_into_candidate(self):
        llm = _llm({
            "id": 99,
            "status": "hired",
            "name": "Jane Doe",
            "email": "jane@x.com",
            "degree": "Master's",
            "degreeField": "TESOL",
            "yearsExperience": "7",
            "hasCertifications": "true",
            "certifications": ["CELTA", "TEFL"],
            "nativeEnglishSpeaker": "yes",
            "militaryExperience": None,
            "notes": "Strong ESL background",
        })

        info = extract_via_ai("Jane Doe resume text", llm)

        assert info.name == "Jane Doe"
        assert info.degree == "Master"
        assert info.degree_field == "TESOL"
        assert info.years_experience == 7
        assert info.has_certifications is True
        assert info.certifications == "CELTA; TEFL"
        assert info.native_english_speaker is True
        assert info.military_experience is None
        assert info.notes == "Strong ESL background"
        assert info.status == "new"
        assert info.resume_url is None
        assert "id" not in info.to_record()

    @pytest.mark.parametrize(
        "value, expected",
        [("abc", 0), (None, 0), ("5+ years", 5), (3.7, 3), (12, 12), (float("inf"), 0), (float("-inf"), 0), (float("nan"), 0)],
    )
    def test_years_experience_coercion(self, value, expected):
        info = extract_via_ai("text", _llm({"yearsExperience": value}))
        assert info.years_experience == expected

    @pytest.mark.parametrize("raw", ['{"yearsExperience": Infinity}', '{"yearsExperience": NaN}'])
    def test_non_finite_years_literal_gives_zero(self, raw):
        assert extract_via_ai("text", _llm(raw)).years_experience == 0

    def test_unrecognised_degree_dropped(self):
        info = extract_via_ai("text", _llm({"degree": "Some coursework"}))
        assert info.degree is None

    def test_request_shape(self):
        llm = _llm({})
        extract_via_ai("resume body", llm)

        kwargs = llm.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][0]["role"] == "system"
        assert kwargs["messages"][1] == {"role": "user", "content": "resume body"}

    def test_blank_text_raises_without_calling_service(self):
        llm = _llm({})
        with pytest.raises(AIExtractionError):
            extract_via_ai("   ", llm)
        llm.client.chat.completions.create.assert_not_called()

    @pytest.mark.parametrize("content", ["not json at all", "[1, 2, 3]", ""])
    def test_bad_reply_raises_response_error(self, content):
        with pytest.raises(AIResponseError):
            extract_via_ai("text", _llm(content))

    def test_service_errors_propagate(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = RuntimeError("connection reset")
        llm = StructuredLLMClient(client=client)

        with pytest.raises(RuntimeError, match="connection reset"):
            extract_via_ai("text", llm)

    def test_extract_file_reads_text_first(self, tmp_path):
        path = tmp_path / "cv.txt"
        path.write_text("Jane Doe, CELTA", encoding="utf-8")
        llm = _llm({"name": "Jane Doe"})

        info = AIExtractor(llm).extract_file(str(path))

        assert info.name == "Jane Doe"
        assert _sent_user_content(llm) == "Jane Doe, CELTA"

    def test_extract_file_without_text_raises(self, tmp_path):
        with pytest.raises(AIExtractionError):
            AIExtractor(_llm({})).extract_file(str(tmp_path / "missing.pdf"))


class TestClientConfiguration:
    def test_missing_api_key(self):
        llm = StructuredLLMClient()
        with pytest.raises(AIConfigurationError):
            extract_via_ai("text", llm)

    def test_model_from_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "gpt-from-env")
        assert StructuredLLMClient(client=MagicMock()).model == "gpt-from-env"

    def test_injected_client_is_not_closed(self):
        client = MagicMock()
        with StructuredLLMClient(client=client):
            pass
        client.close.assert_not_called()


def _records(n):
    return [
        CandidateRecord(id=i, name=f"Candidate {i}", email=f"c{i}@x.com", degree="Bachelor", years_experience=i)
        for i in range(1, n + 1)
    ]


class TestRanking:
    def test_unknown_ids_dropped_order_kept_and_capped(self):
        candidates = _records(15)
        reply_ids = [15, 14, 99, 13, 12, 98, 11, 10, 97, 9, 8, 7, 6, 5, 4]
        llm = _llm({"rankedCandidates": reply_ids, "rationale": "Experience first."})

        result = rank_candidates(candidates, llm)

        assert len(result.ranked) == MAX_RANKED
        assert [c.id for c in result.ranked] == [15, 14, 13, 12, 11, 10, 9, 8, 7, 6]
        assert all(c in candidates for c in result.ranked)
        assert result.rationale == "Experience first."

    def test_projection_sent_without_contact_details(self):
        llm = _llm({"rankedCandidates": [1]})
        rank_candidates(_records(2), llm)

        sent = json.loads(_sent_user_content(llm))
        assert [p["id"] for p in sent] == [1, 2]
        assert sent[0]["education"] == "Bachelor in Unknown"
        assert sent[0]["certifications"] == "None"
        assert sent[0]["overallScore"] == 0
        assert "name" not in sent[0]
        assert "email" not in sent[0]

    def test_empty_input_skips_service(self):
        llm = _llm({})
        result = rank_candidates([], llm)

        assert result.ranked == []
        assert result.rationale == DEFAULT_RATIONALE
        llm.client.chat.completions.create.assert_not_called()

    def test_string_and_object_ids_and_duplicates(self):
        llm = _llm({"rankedCandidates": ["2", {"id": 3}, 2, True, "x"]})
        result = rank_candidates(_records(3), llm)
        assert [c.id for c in result.ranked] == [2, 3]

    def test_malformed_ranking_list_gives_empty_result(self):
        llm = _llm({"rankedCandidates": "1,2,3", "rationale": ""})
        result = rank_candidates(_records(3), llm)
        assert result.ranked == []
        assert result.rationale == DEFAULT_RATIONALE
