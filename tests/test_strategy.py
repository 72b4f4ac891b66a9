from resume_analyzer.core.strategy import Strategy, run_chain
from resume_analyzer.core.text_normalization import build_context


def test_first_non_none_value_wins():
    calls = []

    def none_(ctx):
        calls.append("none")
        return None

    def found(ctx):
        calls.append("found")
        return "value"

    def never(ctx):
        calls.append("never")
        return "late"

    hit = run_chain(
        (Strategy("none", none_), Strategy("found", found), Strategy("never", never)),
        build_context("text"),
    )

    assert hit == ("found", "value")
    assert calls == ["none", "found"]


def test_applies_guard_skips_strategy():
    chain = (
        Strategy("needs_file", lambda ctx: "from file", applies=lambda ctx: bool(ctx.file_path)),
        Strategy("content", lambda ctx: "from content"),
    )

    assert run_chain(chain, build_context("text")) == ("content", "from content")
    assert run_chain(chain, build_context("text", file_path="a.pdf")) == ("needs_file", "from file")


def test_rejected_values_fall_through():
    chain = (Strategy("too_big", lambda ctx: 80), Strategy("ok", lambda ctx: 6))
    assert run_chain(chain, build_context("text"), accept=lambda v: v < 50) == ("ok", 6)


def test_nothing_found():
    assert run_chain((Strategy("none", lambda ctx: None),), build_context("text")) is None
