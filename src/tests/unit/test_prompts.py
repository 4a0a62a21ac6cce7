"""Tests for the click-backed prompter."""

import click
from click.testing import CliRunner

from mcp_get.prompts import ClickPrompter


def run_prompter(answers, **kwargs):
    """Drive ClickPrompter.ask_text inside a command fed with typed input."""
    results = []

    @click.command()
    def ask():
        results.append(ClickPrompter().ask_text("Please enter API key", "API_KEY", **kwargs))

    result = CliRunner().invoke(ask, input="".join(f"{a}\n" for a in answers))
    assert result.exit_code == 0, result.output
    return results, result.output


class TestAskText:
    """Test free-text entry."""

    def test_typed_value_is_returned(self):
        results, _ = run_prompter(["abc"])
        assert results == ["abc"]

    def test_blank_optional_answer_is_none(self):
        results, output = run_prompter([""], required=False)

        assert results == [None]
        assert "is required" not in output

    def test_blank_required_answer_asks_again(self):
        results, output = run_prompter(["", "abc"], required=True)

        assert results == ["abc"]
        assert "API_KEY is required" in output
        assert output.count("Please enter API key") == 2


class TestConfirm:
    """Test yes/no questions."""

    def test_confirm_uses_default_on_blank_answer(self):
        results = []

        @click.command()
        def ask():
            prompter = ClickPrompter()
            results.append(prompter.confirm("Continue?", default=True))
            results.append(prompter.confirm("Continue?", default=False))

        result = CliRunner().invoke(ask, input="\n\n")

        assert result.exit_code == 0
        assert results == [True, False]
