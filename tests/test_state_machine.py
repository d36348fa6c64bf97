"""
Tests for ConversationStateManager transitions.
"""
from datetime import datetime, timedelta, timezone

import pytest

from models.conversation import (
    ConversationConfig,
    DirectorConfig,
    PhilosopherContribution,
    SummarizationConfig,
)
from models.state import (
    Completed,
    CreatingVideoScript,
    Error,
    InProgress,
    NotStarted,
    StateTag,
    SummarizationComplete,
    Summarizing,
    VideoScriptComplete,
)
from models.summary import ConversationSummary, VideoScript

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def contribution(philosopher, round_number, offset):
    return PhilosopherContribution(
        philosopher=philosopher,
        response=f"{philosopher.name} speaks in round {round_number}",
        round_number=round_number,
        timestamp=BASE_TIME + timedelta(seconds=offset),
    )


def run_full_conversation(manager, config):
    manager.start_conversation(config)
    offset = 0
    while isinstance(manager.state, InProgress):
        state = manager.state
        manager.add_contribution(contribution(state.current_philosopher, state.current_round, offset))
        offset += 1


def make_summary():
    return ConversationSummary(
        original_topic="What is justice?",
        condensed_topic="Justice?",
        participants=("Socrates",),
        rounds=(),
        video_notes="notes",
    )


def make_script():
    return VideoScript(title="t", description="d", estimated_duration="60 seconds", scenes=())


class TestConversationFlow:

    def test_initial_state_is_not_started(self, state_manager):
        assert isinstance(state_manager.state, NotStarted)
        assert state_manager.state.tag == StateTag.NOT_STARTED

    def test_start_conversation(self, state_manager, justice_config, socrates):
        state_manager.start_conversation(justice_config)

        state = state_manager.state
        assert isinstance(state, InProgress)
        assert state.current_round == 1
        assert state.current_philosopher_index == 0
        assert state.current_philosopher == socrates
        assert len(state.rounds) == 1
        assert state.rounds[0].contributions == ()

    def test_add_contribution_advances_speaker(self, state_manager, justice_config, socrates, kant):
        state_manager.start_conversation(justice_config)
        state_manager.add_contribution(contribution(socrates, 1, 0))

        state = state_manager.state
        assert isinstance(state, InProgress)
        assert state.current_round == 1
        assert state.current_philosopher == kant
        assert len(state.current_round_data().contributions) == 1

    def test_round_rollover(self, state_manager, justice_config, socrates, kant):
        state_manager.start_conversation(justice_config)
        state_manager.add_contribution(contribution(socrates, 1, 0))
        state_manager.add_contribution(contribution(kant, 1, 1))

        state = state_manager.state
        assert isinstance(state, InProgress)
        assert state.current_round == 2
        assert state.current_philosopher_index == 0
        assert state.rounds[0].is_complete
        assert not state.rounds[1].is_complete
        assert len(state.all_contributions()) == 2

    def test_single_round_completes(self, state_manager, socrates, kant):
        config = ConversationConfig(topic="Is lying ever right?", participants=[socrates, kant], max_rounds=1)
        state_manager.start_conversation(config)
        state_manager.add_contribution(contribution(socrates, 1, 0))
        state_manager.add_contribution(contribution(kant, 1, 1))

        state = state_manager.state
        assert isinstance(state, Completed)
        assert len(state.rounds) == 1
        assert state.rounds[0].is_complete
        assert [c.philosopher for c in state.final_contributions] == [socrates, kant]

    def test_final_contributions_cover_every_turn_in_time_order(self, state_manager, catalog):
        participants = [catalog.get_by_id(i) for i in ("socrates", "kant", "nietzsche")]
        config = ConversationConfig(topic="What is a good life?", participants=participants, max_rounds=3)

        run_full_conversation(state_manager, config)

        state = state_manager.state
        assert isinstance(state, Completed)
        assert len(state.final_contributions) == 9
        timestamps = [c.timestamp for c in state.final_contributions]
        assert timestamps == sorted(timestamps)
        assert all(r.is_complete for r in state.rounds)

    def test_add_contribution_ignored_when_not_started(self, state_manager, socrates):
        before = state_manager.state
        state_manager.add_contribution(contribution(socrates, 1, 0))
        assert state_manager.state is before

    def test_add_contribution_ignored_when_completed(self, state_manager, justice_config, socrates):
        run_full_conversation(state_manager, justice_config)
        before = state_manager.state

        state_manager.add_contribution(contribution(socrates, 3, 99))

        assert state_manager.state is before


class TestPipelineTransitions:

    def test_summarize_requires_completed(self, state_manager):
        state_manager.start_summarization(SummarizationConfig())

        assert isinstance(state_manager.state, Error)
        assert state_manager.state.message == "Can only summarize completed conversations"

    def test_complete_summarization_requires_summarizing(self, state_manager):
        state_manager.complete_summarization(make_summary())

        assert isinstance(state_manager.state, Error)
        assert state_manager.state.message == "Not currently summarizing"

    def test_video_script_requires_summary(self, state_manager, justice_config):
        run_full_conversation(state_manager, justice_config)
        state_manager.start_video_script_creation(DirectorConfig())

        assert isinstance(state_manager.state, Error)
        assert state_manager.state.message == "Can only create video scripts from completed summaries"

    def test_complete_video_script_requires_creating(self, state_manager):
        state_manager.complete_video_script(make_script())

        assert isinstance(state_manager.state, Error)
        assert state_manager.state.message == "Not currently creating video script"

    def test_full_pipeline(self, state_manager, justice_config):
        run_full_conversation(state_manager, justice_config)
        completed = state_manager.state

        state_manager.start_summarization(SummarizationConfig(target_rounds=2))
        assert isinstance(state_manager.state, Summarizing)
        assert state_manager.state.original_conversation is completed

        summary = make_summary()
        state_manager.complete_summarization(summary)
        assert isinstance(state_manager.state, SummarizationComplete)
        assert state_manager.state.summary is summary

        state_manager.start_video_script_creation(DirectorConfig())
        assert isinstance(state_manager.state, CreatingVideoScript)

        script = make_script()
        state_manager.complete_video_script(script)
        state = state_manager.state
        assert isinstance(state, VideoScriptComplete)
        assert state.summary is summary
        assert state.video_script is script

    def test_set_error_keeps_cause(self, state_manager):
        cause = RuntimeError("boom")
        state_manager.set_error("Something failed", cause)

        assert state_manager.state.message == "Something failed"
        assert state_manager.state.cause is cause

    @pytest.mark.parametrize("setup", ["not_started", "in_progress", "completed", "error"])
    def test_reset_from_any_state(self, state_manager, justice_config, setup):
        if setup == "in_progress":
            state_manager.start_conversation(justice_config)
        elif setup == "completed":
            run_full_conversation(state_manager, justice_config)
        elif setup == "error":
            state_manager.set_error("oops")

        state_manager.reset()

        assert isinstance(state_manager.state, NotStarted)


class TestSubscribers:

    def test_listeners_see_every_commit_in_order(self, state_manager, socrates):
        config = ConversationConfig(topic="Courage?", participants=[socrates], max_rounds=2)
        seen = []
        state_manager.subscribe(lambda s: seen.append(s.tag))

        run_full_conversation(state_manager, config)

        assert seen == [StateTag.IN_PROGRESS, StateTag.IN_PROGRESS, StateTag.COMPLETED]

    def test_unsubscribe(self, state_manager):
        seen = []
        unsubscribe = state_manager.subscribe(seen.append)

        state_manager.set_error("first")
        unsubscribe()
        state_manager.reset()

        assert len(seen) == 1

    def test_failing_listener_does_not_block_others(self, state_manager):
        seen = []

        def broken(state):
            raise RuntimeError("listener bug")

        state_manager.subscribe(broken)
        state_manager.subscribe(seen.append)

        state_manager.set_error("oops")

        assert len(seen) == 1
        assert isinstance(state_manager.state, Error)
