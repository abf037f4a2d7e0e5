"""Tests for the analysis prompt."""

from mind_mirror.shared.prompt import build_prompt


class TestBuildPrompt:

    def test_user_text_is_appended(self):
        prompt = build_prompt("I love my job")
        assert prompt.endswith("Text to analyse: I love my job")

    def test_requests_strict_json_fields(self):
        prompt = build_prompt("anything")
        for field in ('"sentiment"', '"mood"', '"themes"', '"tone"', '"summary"', '"disclaimer"'):
            assert field in prompt
        assert "STRICTLY as JSON" in prompt

    def test_forbids_diagnostic_language(self):
        prompt = build_prompt("anything")
        assert "do NOT make diagnoses" in prompt
        assert "hedged" in prompt

    def test_is_deterministic(self):
        assert build_prompt("same") == build_prompt("same")
