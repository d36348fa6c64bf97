"""
Pure functions that render user prompts from typed inputs.

Nothing here talks to a model or touches conversation state; the engines
call these and pass the resulting strings to the LLM client.
"""

import json
from typing import List, Sequence

from models.conversation import DirectorConfig, Philosopher, SummarizationConfig
from models.state import Completed, InProgress
from models.summary import ConversationSummary
from prompts.registry import PromptRegistry


# ── Conversation turns ────────────────────────────────────────────────────────

def build_context(state: InProgress) -> str:
    """
    Render every earlier contribution, grouped under a "=== Round N ===" label
    in round order, speakers in the order they spoke.

    Returns an empty string when nobody has spoken yet.
    """
    if not any(r.contributions for r in state.rounds):
        return ""

    lines: List[str] = [
        PromptRegistry.get("conversation_context_header", topic=state.config.topic),
        "",
    ]
    for round_ in sorted(state.rounds, key=lambda r: r.round_number):
        if not round_.contributions:
            continue
        lines.append(f"=== Round {round_.round_number} ===")
        for contribution in round_.contributions:
            lines.append(f"{contribution.philosopher.name}: {contribution.response}")
            lines.append("")

    if state.current_round > 1:
        lines.append(f"Now beginning Round {state.current_round}.")

    return "\n".join(lines)


def build_initial_prompt(philosopher: Philosopher, topic: str, max_words: int) -> str:
    return PromptRegistry.get(
        "conversation_initial",
        topic=topic,
        philosopher_name=philosopher.name,
        max_words=max_words,
    )


def build_follow_up_prompt(philosopher: Philosopher, topic: str, context: str, max_words: int) -> str:
    return PromptRegistry.get(
        "conversation_follow_up",
        topic=topic,
        context=context,
        philosopher_name=philosopher.name,
        max_words=max_words,
    )


def build_turn_prompt(philosopher: Philosopher, state: InProgress) -> str:
    """Opening framing when nobody has spoken yet, follow-up framing otherwise."""
    config = state.config
    context = build_context(state)
    if not context:
        return build_initial_prompt(philosopher, config.topic, config.max_words_per_response)
    return build_follow_up_prompt(philosopher, config.topic, context, config.max_words_per_response)


# ── Summarization ─────────────────────────────────────────────────────────────

def format_transcript(conversation: Completed) -> str:
    """Plain-text transcript grouped by round, original speaking order."""
    lines: List[str] = []
    for round_ in conversation.rounds:
        lines.append(f"\n--- Round {round_.round_number} ---")
        for contribution in round_.contributions:
            lines.append(f"{contribution.philosopher.name}: {contribution.response}")
    return "\n".join(lines).strip()


def build_summarization_prompt(
    topic: str,
    participants: Sequence[str],
    transcript: str,
    config: SummarizationConfig,
) -> str:
    if config.preserve_original_participants:
        participant_rule = f"- Include ALL original participants: {', '.join(participants)}"
    else:
        participant_rule = "- You may drop participants whose contributions add little"
    return PromptRegistry.get(
        "summarization_request",
        topic=topic,
        participants=", ".join(participants),
        transcript=transcript,
        target_rounds=config.target_rounds,
        max_words=config.max_words_per_response,
        participant_rule=participant_rule,
        topic_json=json.dumps(topic),
        participants_json=json.dumps(list(participants)),
        first_speaker_json=json.dumps(participants[0] if participants else "Philosopher"),
    )


# ── Director ──────────────────────────────────────────────────────────────────

def format_summary_for_director(summary: ConversationSummary) -> str:
    lines: List[str] = [
        "PHILOSOPHICAL DISCUSSION SUMMARY",
        f"Original Topic: {summary.original_topic}",
        f"Condensed Topic: {summary.condensed_topic}",
        f"Participants: {', '.join(summary.participants)}",
        f"Total Word Count: {summary.total_word_count}",
        "",
        f"Video Notes: {summary.video_notes}",
        "",
    ]
    for round_ in summary.rounds:
        lines.append(f"--- Round {round_.round_number} ({round_.word_count} words) ---")
        for contribution in round_.contributions:
            lines.append(f"{contribution.philosopher_name}: {contribution.response}")
        lines.append("")
    return "\n".join(lines).strip()


def build_director_prompt(summary_text: str, config: DirectorConfig) -> str:
    if config.include_opening_shot:
        opening_rule = "Start with one OPENING scene that establishes the setting and the question"
    else:
        opening_rule = "Do not include an OPENING scene; start directly with dialogue"
    if config.include_closing_shot:
        closing_rule = "End with one CLOSING scene that leaves the viewer with the central question"
    else:
        closing_rule = "Do not include a CLOSING scene; end on the final line of dialogue"
    return PromptRegistry.get(
        "director_request",
        summary=summary_text,
        duration=config.estimated_duration,
        opening_rule=opening_rule,
        closing_rule=closing_rule,
        transition_style=config.scene_transition_style,
    )
