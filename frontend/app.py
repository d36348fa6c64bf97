"""
Streamlit frontend for Sophia — philosopher discussions turned into short videos.

Two tabs:
  🏛️ New Discussion — pick philosophers and a topic, watch the rounds arrive,
                      then summarize and storyboard the result
  📚 History        — browse saved conversations, summaries and scripts

All orchestration lives in backend/; this file only renders state.
"""

import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import streamlit as st
from dotenv import load_dotenv

load_dotenv()
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

from backend.config import Settings
from backend.service import PhilosopherService
from models.conversation import ConversationConfig, DirectorConfig, SummarizationConfig
from models.state import Completed, Error, InProgress, SummarizationComplete, VideoScriptComplete

# ── Page config ───────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Sophia — Philosopher Dialogues",
    page_icon="🏛️",
    layout="wide",
)

st.title("🏛️ Sophia — Philosopher Dialogues")
st.caption(
    "Great thinkers debate your question round by round.  Condense the debate "
    "into a punchy summary, then let the Director storyboard a short video."
)

settings = Settings.from_env()
if not settings.has_api_key:
    st.error(
        f"No API key for the '{settings.profile.name}' profile "
        f"({settings.profile.provider}).  Please set it in your .env file."
    )
    st.stop()


@st.cache_resource
def get_service() -> PhilosopherService:
    return PhilosopherService(settings=settings)


service = get_service()


# ── Shared helpers ────────────────────────────────────────────────────────────

def render_summary(summary) -> None:
    st.subheader(f"📝 {summary.condensed_topic}")
    st.caption(f"{summary.total_word_count} words · {', '.join(summary.participants)}")
    for round_ in summary.rounds:
        st.markdown(f"**Round {round_.round_number}**")
        for c in round_.contributions:
            st.markdown(f"- **{c.philosopher_name}:** {c.response}")
    st.info(summary.video_notes)


def render_video_script(script) -> None:
    st.subheader(f"🎬 {script.title}")
    st.caption(f"{script.estimated_duration} · {script.total_scenes} scenes")
    st.markdown(script.description)
    for scene in script.scenes:
        with st.expander(f"Scene {scene.scene_number} — {scene.type.value} ({scene.duration})"):
            st.markdown(f"**Image prompt:** {scene.image_prompt}")
            if scene.dialogue:
                speaker = scene.philosopher_name or "Narrator"
                st.markdown(f"**{speaker}:** {scene.dialogue}")
            if scene.director_notes:
                st.caption(scene.director_notes)
    if script.production_notes:
        st.markdown("**Production notes**")
        for note in script.production_notes:
            st.markdown(f"- {note}")


def render_error(state: Error) -> None:
    detail = f" ({state.cause})" if state.cause else ""
    st.error(f"{state.message}{detail}")
    if st.button("🔄 Start over", key="restart_after_error"):
        service.reset_conversation()
        st.rerun()


# ── Tabs ──────────────────────────────────────────────────────────────────────

tab_live, tab_history = st.tabs(["🏛️ New Discussion", "📚 History"])


# ══════════════════════════════════════════════════════════════════════════════
# TAB 1 — New Discussion
# ══════════════════════════════════════════════════════════════════════════════

with tab_live:
    philosophers = service.get_all_philosophers()
    by_name = {p.name: p for p in philosophers}

    with st.sidebar:
        st.header("🏛️ Discussion Setup")
        topic = st.text_area("Topic", value="What is justice?", height=80)
        chosen = st.multiselect(
            "Philosophers (speaking order)",
            list(by_name),
            default=["Socrates", "Immanuel Kant"],
        )
        max_rounds = st.slider("Rounds", min_value=1, max_value=6, value=2)
        max_words = st.slider("Max words per response", min_value=50, max_value=300, value=150, step=25)
        st.divider()
        start_btn = st.button("💬 Start Discussion", type="primary", use_container_width=True)
        st.caption(f"Profile: **{settings.profile.name}** · {settings.profile.philosophical_model}")

    if start_btn:
        try:
            config = ConversationConfig(
                topic=topic,
                participants=[by_name[name] for name in chosen],
                max_rounds=max_rounds,
                max_words_per_response=max_words,
            )
        except ValueError as exc:
            st.error(str(exc))
            st.stop()

        total_turns = len(config.participants) * config.max_rounds
        progress_bar = st.progress(0, text="Starting discussion…")
        status_text = st.empty()
        transcript_area = st.container()
        shown = {"count": 0}

        def on_state(state) -> None:
            if isinstance(state, InProgress):
                contributions = state.all_contributions()
                speaker = state.current_philosopher
                if speaker is not None:
                    status_text.info(f"Round {state.current_round}: {speaker.name} is thinking…")
            elif isinstance(state, Completed):
                contributions = list(state.final_contributions)
            else:
                return
            for c in contributions[shown["count"]:]:
                with transcript_area:
                    st.markdown(f"**{c.philosopher.name}** · round {c.round_number}")
                    st.markdown(c.response)
            shown["count"] = len(contributions)
            progress_bar.progress(
                int(len(contributions) / total_turns * 100),
                text=f"{len(contributions)} / {total_turns} turns",
            )

        unsubscribe = service.subscribe(on_state)
        try:
            final_state = service.start_conversation(config)
        finally:
            unsubscribe()

        if isinstance(final_state, Completed):
            status_text.success("The discussion is complete!")

    state = service.state

    if isinstance(state, Error):
        render_error(state)

    elif isinstance(state, Completed):
        if not start_btn:
            st.subheader(f"💬 {state.config.topic}")
            for c in state.final_contributions:
                st.markdown(f"**{c.philosopher.name}** · round {c.round_number}")
                st.markdown(c.response)
        st.divider()
        col1, col2 = st.columns(2)
        target_rounds = col1.slider("Summary rounds", 1, 5, 3)
        summary_words = col2.slider("Words per summarized response", 20, 100, 50, step=10)
        if st.button("✂️ Summarize for video", type="primary"):
            with st.spinner("Condensing the discussion…"):
                try:
                    service.summarize_current(SummarizationConfig(
                        target_rounds=target_rounds,
                        max_words_per_response=summary_words,
                    ))
                except Exception as exc:
                    st.error(f"Summarization failed: {exc}")
            st.rerun()

    elif isinstance(state, SummarizationComplete):
        render_summary(state.summary)
        st.divider()
        opening = st.checkbox("Include opening shot", value=True)
        closing = st.checkbox("Include closing shot", value=True)
        if st.button("🎬 Create video script", type="primary"):
            with st.spinner("The Director is storyboarding…"):
                try:
                    service.create_video_script(DirectorConfig(
                        include_opening_shot=opening,
                        include_closing_shot=closing,
                    ))
                except Exception as exc:
                    st.error(f"Video script creation failed: {exc}")
            st.rerun()

    elif isinstance(state, VideoScriptComplete):
        render_summary(state.summary)
        st.divider()
        render_video_script(state.video_script)
        if st.button("🆕 New discussion"):
            service.reset_conversation()
            st.rerun()

    elif not start_btn:
        st.info("Choose a topic and philosophers in the sidebar, then click **💬 Start Discussion**")
        st.markdown("""
### How it works

1. Each philosopher answers in turn, in the order you picked them, for every round.
2. Later speakers see everything said so far and respond to it.
3. **Summarize** condenses the discussion into a few punchy rounds for short-form video.
4. The **Director** turns that summary into a scene-by-scene storyboard with image prompts.
""")


# ══════════════════════════════════════════════════════════════════════════════
# TAB 2 — History
# ══════════════════════════════════════════════════════════════════════════════

with tab_history:
    conversations = service.get_all_conversations()
    if not conversations:
        st.info("No saved conversations yet.")

    for stored in conversations:
        label = f"{stored.topic} — {stored.status} · {stored.created_at[:16]}"
        with st.expander(label):
            st.caption(", ".join(p.name for p in stored.participants))
            if stored.error_message:
                st.error(stored.error_message)
            for c in stored.contributions:
                st.markdown(f"**{c.philosopher_name}** (round {c.round_number}): {c.response}")

            summaries = service.get_summaries_for_conversation(stored.id)
            for stored_summary in summaries:
                st.divider()
                render_summary(stored_summary.to_summary())
                scripts = service.storage.get_video_scripts_for_summary(stored_summary.id)
                if scripts:
                    render_video_script(scripts[0].to_video_script())
                elif st.button("🎬 Create video script", key=f"script_{stored_summary.id}"):
                    with st.spinner("The Director is storyboarding…"):
                        try:
                            service.create_video_script_for_summary(stored_summary.id)
                        except Exception as exc:
                            st.error(f"Video script creation failed: {exc}")
                            st.stop()
                    st.rerun()

            cols = st.columns(2)
            if stored.status == "completed" and cols[0].button("✂️ Summarize", key=f"sum_{stored.id}"):
                with st.spinner("Condensing the discussion…"):
                    try:
                        service.summarize_stored_conversation(stored.id)
                    except Exception as exc:
                        st.error(f"Summarization failed: {exc}")
                        st.stop()
                st.rerun()
            if cols[1].button("🗑️ Delete", key=f"del_{stored.id}"):
                service.delete_conversation(stored.id)
                st.rerun()
