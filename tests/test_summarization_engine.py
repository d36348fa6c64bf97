"""
Tests for the summarization engine and its response parser.
"""
import json

import pytest

from backend.config import SUMMARIZATION_MAX_TOKENS, SUMMARIZATION_TEMPERATURE
from backend.conversation_engine import ConversationEngine
from backend.json_response import ResponseParseError
from backend.llm_client import EmptyResponseError
from backend.summarization_engine import (
    DEFAULT_VIDEO_NOTES,
    SummarizationEngine,
    parse_summarization_response,
)
from models.conversation import SummarizationConfig

from conftest import FakeLLMClient


@pytest.fixture
def completed(state_manager, justice_config, model):
    llm = FakeLLMClient(["Justice is virtue.", "Justice is duty.", "Whose virtue?", "Universal duty."])
    ConversationEngine(llm, state_manager, model=model, turn_delay=0).start(justice_config)
    return state_manager.state


def summary_payload(rounds, **extra):
    body = {"participants": ["Socrates", "Immanuel Kant"], "rounds": rounds}
    body.update(extra)
    return json.dumps({"summary": body})


class TestSummarizeConversation:

    def test_summarize(self, completed, model, summary_json):
        llm = FakeLLMClient([summary_json])
        summary = SummarizationEngine(llm, model).summarize_conversation(
            completed, SummarizationConfig(target_rounds=2, max_words_per_response=40)
        )

        assert summary.original_topic == "What is justice?"
        assert summary.condensed_topic == "Justice: virtue or duty?"
        assert summary.participants == ("Socrates", "Immanuel Kant")
        assert [r.round_number for r in summary.rounds] == [1, 2]
        assert summary.total_word_count == 23
        assert summary.video_notes == "Sharp contrast between virtue and duty"

    def test_prompt_contents(self, completed, model, summary_json):
        llm = FakeLLMClient([summary_json])
        SummarizationEngine(llm, model).summarize_conversation(
            completed, SummarizationConfig(target_rounds=2, max_words_per_response=40)
        )

        call = llm.calls[0]
        assert call["max_tokens"] == SUMMARIZATION_MAX_TOKENS
        assert call["temperature"] == SUMMARIZATION_TEMPERATURE
        assert "Exactly 2 rounds" in call["user_context"]
        assert "Maximum 40 words" in call["user_context"]
        assert "--- Round 1 ---" in call["user_context"]
        assert "Immanuel Kant: Universal duty." in call["user_context"]
        assert "Include ALL original participants: Socrates, Immanuel Kant" in call["user_context"]
        assert "summarizer" in call["system_prompt"]

    def test_dropping_participants_allowed(self, completed, model, summary_json):
        llm = FakeLLMClient([summary_json])
        SummarizationEngine(llm, model).summarize_conversation(
            completed, SummarizationConfig(preserve_original_participants=False)
        )

        assert "Include ALL original participants" not in llm.calls[0]["user_context"]

    def test_blank_response(self, completed, model):
        engine = SummarizationEngine(FakeLLMClient([""]), model)

        with pytest.raises(EmptyResponseError):
            engine.summarize_conversation(completed, SummarizationConfig())

    def test_llm_errors_propagate(self, completed, model):
        engine = SummarizationEngine(FakeLLMClient([RuntimeError("down")]), model)

        with pytest.raises(RuntimeError, match="down"):
            engine.summarize_conversation(completed, SummarizationConfig())


class TestParseSummarizationResponse:

    def test_rounds_renumbered_by_position(self):
        text = summary_payload([
            {"roundNumber": 7, "contributions": [{"philosopherName": "Socrates", "response": "a b c"}]},
            {"roundNumber": 3, "contributions": [{"philosopherName": "Immanuel Kant", "response": "d e"}]},
        ])

        summary = parse_summarization_response(text, "What is justice?")

        assert [r.round_number for r in summary.rounds] == [1, 2]

    def test_defaults(self):
        text = summary_payload([
            {"contributions": [{"philosopherName": "Socrates", "response": "Know thyself, friend."}]},
        ])

        summary = parse_summarization_response(text, "Who am I?")

        assert summary.condensed_topic == "Who am I?"
        assert summary.video_notes == DEFAULT_VIDEO_NOTES
        assert summary.rounds[0].contributions[0].word_count == 3

    def test_fenced_json(self, summary_json):
        summary = parse_summarization_response(f"Here you go:\n```json\n{summary_json}\n```", "What is justice?")

        assert len(summary.rounds) == 2

    def test_three_speakers_with_echoed_round_numbers(self):
        speakers = ["Socrates", "Immanuel Kant", "Friedrich Nietzsche"]
        text = json.dumps({"summary": {
            "participants": speakers,
            "rounds": [
                {"roundNumber": 5, "contributions": [
                    {"philosopherName": name, "response": f"{name} opens."} for name in speakers
                ]},
                {"roundNumber": 9, "contributions": [
                    {"philosopherName": name, "response": f"{name} closes.", "wordCount": 2} for name in speakers
                ]},
            ],
        }})

        summary = parse_summarization_response(text, "Is God dead?")

        assert [r.round_number for r in summary.rounds] == [1, 2]
        assert [len(r.contributions) for r in summary.rounds] == [3, 3]
        assert [c.philosopher_name for c in summary.rounds[1].contributions] == speakers
        assert summary.rounds[0].contributions[1].word_count == 3
        assert summary.total_word_count == 2 + 3 + 3 + 6

    def test_missing_participants(self):
        text = json.dumps({"summary": {"rounds": []}})

        with pytest.raises(ResponseParseError, match="participants"):
            parse_summarization_response(text, "t")

    def test_missing_rounds(self):
        text = json.dumps({"summary": {"participants": ["Socrates"]}})

        with pytest.raises(ResponseParseError, match="rounds"):
            parse_summarization_response(text, "t")

    def test_missing_summary(self):
        with pytest.raises(ResponseParseError, match="summary"):
            parse_summarization_response('{"rounds": []}', "t")

    def test_missing_contributions(self):
        text = summary_payload([{"roundNumber": 1}])

        with pytest.raises(ResponseParseError, match="contributions"):
            parse_summarization_response(text, "t")

    def test_missing_response(self):
        text = summary_payload([{"contributions": [{"philosopherName": "Socrates"}]}])

        with pytest.raises(ResponseParseError, match="response"):
            parse_summarization_response(text, "t")

    def test_not_json(self):
        with pytest.raises(ResponseParseError, match="Failed to parse summarization response"):
            parse_summarization_response("I cannot summarize this.", "t")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_summarization_response("[]", "t")
