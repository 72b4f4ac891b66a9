"""
Years of experience, certifications, native-speaker and military flags,
nationality.
"""

import pytest

from resume_analyzer.core.qualification_parser import (
    GENERIC_CERTIFICATION_TEXT,
    extract_certifications,
    extract_nationality,
    extract_years_experience,
    has_military_experience,
    is_native_english_speaker,
)


class TestYearsOfExperience:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0 years of teaching experience", None),
            ("49 years of teaching experience", 49),
            ("50 years of teaching experience", None),
            ("51 years of teaching experience", None),
            ("5+ years experience in ESL", 5),
            ("Experience: 7 years", 7),
            ("Professional experience spanning 12 yrs", 12),
        ],
    )
    def test_years_bounds_and_shapes(self, ctx, text, expected):
        assert extract_years_experience(ctx(text)) == expected

    def test_later_sane_match_is_used(self, ctx):
        c = ctx("60 years of work experience claimed, really 8 years of teaching experience")
        assert extract_years_experience(c) == 8

    def test_no_experience_phrase(self, ctx):
        assert extract_years_experience(ctx("Graduated in 2015")) is None


class TestCertifications:
    def test_named_certificates_keep_context(self, ctx):
        has_certs, text = extract_certifications(ctx("Holds TEFL and CELTA certificates from Cambridge."))
        assert has_certs is True
        assert "TEFL" in text
        assert text != GENERIC_CERTIFICATION_TEXT

    def test_multiple_patterns_join_snippets(self, ctx):
        _, text = extract_certifications(ctx("TEFL qualified. Certified English teacher in Madrid."))
        assert "; " in text

    @pytest.mark.parametrize(
        "text",
        ["Certified ESL instructor", "Holds a Certificate in Teaching English"],
    )
    def test_certification_phrases(self, ctx, text):
        assert extract_certifications(ctx(text))[0] is True

    def test_none_found(self, ctx):
        assert extract_certifications(ctx("Barista with a passion for coffee")) == (False, None)


@pytest.mark.parametrize(
    "text",
    ["Native English speaker", "First language: English", "L1: English", "English mother tongue"],
)
def test_native_speaker_declared(ctx, text):
    assert is_native_english_speaker(ctx(text)) is True


def test_native_speaker_absent_rather_than_false(ctx):
    assert is_native_english_speaker(ctx("Fluent in English and French")) is None


@pytest.mark.parametrize(
    "text",
    ["Served with the Marines for 4 years", "U.S. Navy, 2001-2005", "Proud veteran", "National Guard reservist"],
)
def test_military_found(ctx, text):
    assert has_military_experience(ctx(text)) is True


def test_military_absent_rather_than_false(ctx):
    assert has_military_experience(ctx("Marketing manager at a startup")) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Nationality: Canadian\nGender: F", "Canadian"),
        ("Citizenship: New Zealand", "New Zealand"),
        ("I am a citizen of the United Kingdom", "United Kingdom"),
    ],
)
def test_nationality(ctx, text, expected):
    assert extract_nationality(ctx(text)) == expected


def test_no_nationality(ctx):
    assert extract_nationality(ctx("Born and raised somewhere")) is None
