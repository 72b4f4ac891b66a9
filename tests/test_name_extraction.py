"""
Name extraction tests: file names, personal-info sections, top-of-document
lines and the capitalized-run fallback.
"""

import pytest

from resume_analyzer.core.name_parser import (
    _from_capitalized_runs,
    _from_personal_section,
    _near_email_patterns,
    extract_name,
    is_auto_generated_filename,
    name_from_filename,
)


class TestFileNames:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/uploads/Resume_Jane_Doe.pdf", "Jane Doe"),
            ("JaneDoeResume.docx", "Jane Doe"),
            ("cv-maria-lopez-final.pdf", "Maria Lopez"),
            ("Cvetkova_Anna.pdf", "Cvetkova Anna"),
            ("Resume_Tom_English.pdf", "Tom English"),
            ("Jane_Doe_English_Teacher_final.docx", "Jane Doe"),
            ("Mary_Teacher_CV.pdf", "Mary Teacher"),
        ],
    )
    def test_name_read_from_file_name(self, path, expected):
        assert name_from_filename(path) == expected

    @pytest.mark.parametrize("stem", ["Resume202504170332", "CV-2024-01-15", "scan_0001"])
    def test_auto_generated_names(self, stem):
        assert is_auto_generated_filename(stem)
        assert name_from_filename(f"{stem}.pdf") is None

    def test_single_token_is_not_a_name(self):
        assert name_from_filename("resume.pdf") is None
        assert name_from_filename("Jane.pdf") is None


def test_file_name_takes_priority(ctx):
    c = ctx("PETER PARKER\nteacher", file_path="Resume_Jane_Doe.pdf")
    assert extract_name(c) == "Jane Doe"


def test_auto_generated_file_name_uses_content(ctx):
    c = ctx("JOHN SMITH\njohn@x.com", file_path="Resume202504170332.pdf")
    assert extract_name(c) == "John Smith"


def test_personal_section_label(ctx):
    c = ctx("Personal Information\nFull Name: Maria Lopez\nEmail: maria@x.com")
    assert _from_personal_section(c) == "Maria Lopez"
    assert extract_name(c) == "Maria Lopez"


def test_heading_line_is_skipped(ctx):
    c = ctx("CURRICULUM VITAE\nJohn Smith\njohn@x.com")
    assert extract_name(c) == "John Smith"


def test_resume_of_phrase(ctx):
    c = ctx("Resume of Ahmed Al-Farsi\nEnglish teacher since 2012")
    assert extract_name(c) == "Ahmed Al-Farsi"


def test_name_does_not_swallow_label(ctx):
    c = ctx("Name: Emily Clarke Email: emily@x.com Phone: 555-123-4567")
    assert extract_name(c) == "Emily Clarke"


def test_near_email_patterns():
    before, after = _near_email_patterns("jd@x.com")
    assert before.search("contact Jane Doe <jd@x.com>").group(1) == "Jane Doe"
    assert after.search("jd@x.com | Jane Doe").group(1) == "Jane Doe"


def test_capitalized_run_prefers_non_heading(ctx):
    c = ctx("Resume Summary for the role. Jane Doe teaches.")
    assert _from_capitalized_runs(c) == "Jane Doe"


def test_capitalized_run_falls_back_to_first_run(ctx):
    assert _from_capitalized_runs(ctx("about Curriculum Vitae")) == "Curriculum Vitae"


def test_no_name_found(ctx):
    assert extract_name(ctx("lowercase only text, nothing capitalized here")) is None
