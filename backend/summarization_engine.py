"""
Summarization engine — condenses a completed conversation into a short,
video-ready ConversationSummary with one model call.

The engine does not touch the state machine.  Parse failures are raised to
the caller as ResponseParseError, and the caller decides whether to move
the conversation into the Error state.

Parsing policy:
  - missing `summary`, `participants`, `rounds` (or a round's
    `contributions`) is fatal
  - missing `condensedTopic`, `videoNotes` or a contribution's `wordCount`
    falls back to a default
  - rounds are renumbered 1..N by array position; any echoed
    `roundNumber` is ignored
"""

import logging

from backend.config import SUMMARIZATION_MAX_TOKENS, SUMMARIZATION_TEMPERATURE, LLMModel
from backend.json_response import (
    ResponseParseError,
    load_json_object,
    optional_int,
    optional_str,
    require_array,
    require_object,
    require_str,
)
from backend.llm_client import EmptyResponseError, LLMClient
from models.conversation import SummarizationConfig, count_words
from models.state import Completed
from models.summary import ConversationSummary, SummaryContribution, SummaryRound
from prompts.builder import build_summarization_prompt, format_transcript
from prompts.registry import PromptRegistry

logger = logging.getLogger(__name__)

DEFAULT_VIDEO_NOTES = "Condensed philosophical discussion suitable for short-form video content"


class SummarizationEngine:

    def __init__(self, llm_client: LLMClient, model: LLMModel):
        self._llm = llm_client
        self._model = model

    def summarize_conversation(
        self, conversation: Completed, config: SummarizationConfig
    ) -> ConversationSummary:
        topic = conversation.config.topic
        participants = conversation.config.participant_names
        logger.info("Summarizing conversation on '%s' into %d rounds", topic, config.target_rounds)

        prompt = build_summarization_prompt(
            topic=topic,
            participants=participants,
            transcript=format_transcript(conversation),
            config=config,
        )
        response = self._llm.chat_completion(
            model=self._model,
            system_prompt=PromptRegistry.get("summarization_system"),
            user_context=prompt,
            max_tokens=SUMMARIZATION_MAX_TOKENS,
            temperature=SUMMARIZATION_TEMPERATURE,
        )
        if not response.text or not response.text.strip():
            raise EmptyResponseError("Empty response from LLM while summarizing")

        summary = parse_summarization_response(response.text, topic)
        logger.info(
            "Summary created: %d rounds, %d words", len(summary.rounds), summary.total_word_count
        )
        return summary


def parse_summarization_response(text: str, original_topic: str) -> ConversationSummary:
    try:
        data = load_json_object(text)
        summary_obj = require_object(data, "summary")
        participants = tuple(str(p) for p in require_array(summary_obj, "participants"))
        rounds_data = require_array(summary_obj, "rounds")

        rounds = []
        for index, round_obj in enumerate(rounds_data, start=1):
            if not isinstance(round_obj, dict):
                raise ResponseParseError(f"Round {index} is not an object")
            contributions = []
            for item in require_array(round_obj, "contributions", where=f"round {index}"):
                if not isinstance(item, dict):
                    raise ResponseParseError(f"Contribution in round {index} is not an object")
                response = require_str(item, "response", where=f"round {index}")
                word_count = optional_int(item, "wordCount")
                contributions.append(SummaryContribution(
                    philosopher_name=require_str(item, "philosopherName", where=f"round {index}"),
                    response=response,
                    word_count=word_count if word_count is not None else count_words(response),
                ))
            rounds.append(SummaryRound(round_number=index, contributions=tuple(contributions)))

        return ConversationSummary(
            original_topic=original_topic,
            condensed_topic=optional_str(summary_obj, "condensedTopic") or original_topic,
            participants=participants,
            rounds=tuple(rounds),
            video_notes=optional_str(summary_obj, "videoNotes") or DEFAULT_VIDEO_NOTES,
        )
    except ResponseParseError as exc:
        logger.error("Failed to parse summarization response: %s", exc)
        raise ResponseParseError(f"Failed to parse summarization response: {exc}") from exc
