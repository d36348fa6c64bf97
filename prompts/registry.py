"""
Prompt Registry — every conversation, summarization and director template
lives here.

Pattern: PromptRegistry acts as a factory.  Call PromptRegistry.get(name)
to retrieve a prompt by its key.  Templates that embed a JSON example
escape their braces ({{ }}) because they go through str.format.
Persona system prompts are kept separately in prompts/philosophers.py.
"""

from typing import Dict


# ── Prompt definitions ────────────────────────────────────────────────────────

PROMPTS: Dict[str, str] = {

    # ------------------------------------------------------------------
    # Conversation turns — opening vs. follow-up framing
    # ------------------------------------------------------------------
    "conversation_initial": """Topic for discussion: "{topic}"

This is the start of a philosophical discussion on the topic: "{topic}"
Please provide your initial thoughts on this topic as {philosopher_name}.
Share your philosophical perspective and approach to this question.
Keep your response concise but substantive (no more than {max_words} words).""",

    "conversation_follow_up": """Topic for discussion: "{topic}"

{context}
Please respond to the discussion as {philosopher_name}.
Build upon or challenge the previous points made, staying true to your philosophical perspective.
Keep your response concise but substantive (no more than {max_words} words).""",

    "conversation_context_header": """Previous contributions to this philosophical discussion on "{topic}":""",

    # ------------------------------------------------------------------
    # Summarizer
    # ------------------------------------------------------------------
    "summarization_system": """You are a philosophical conversation summarizer. Your task is to analyze a full
philosophical discussion and create a condensed version suitable for short-form
video content (like YouTube Shorts).

Your goals:
- Identify the most impactful and insightful moments from each philosopher
- Extract the strongest arguments and most memorable quotes
- Maintain the philosophical depth while making it accessible
- Create punchy, engaging exchanges that work well in video format
- Preserve each philosopher's distinctive voice and perspective

Focus on:
- Moments of profound insight or wisdom
- Sharp disagreements or contrasts between philosophies
- Quotable lines that capture each philosopher's essence
- Clear, concise arguments that don't need extensive context
- Exchanges that build dramatic tension or resolution

Always answer with a single valid JSON object and nothing else.""",

    "summarization_request": """ORIGINAL CONVERSATION TO SUMMARIZE:
Topic: "{topic}"
Participants: {participants}

Full conversation:
{transcript}

SUMMARIZATION TASK:
Create a condensed version of this philosophical discussion optimized for short-form video content.
Requirements:
- Exactly {target_rounds} rounds of discussion
- Maximum {max_words} words per philosopher response
{participant_rule}
- Each philosopher should speak once per round in the same order as the original
- Focus on the most impactful ideas and memorable moments
- Maintain each philosopher's authentic voice and key arguments
- Make each exchange punchy and suitable for video

Format your response as a JSON object with this structure:
{{
  "summary": {{
    "originalTopic": {topic_json},
    "condensedTopic": "A shorter, punchier version of the topic",
    "participants": {participants_json},
    "rounds": [
      {{
        "roundNumber": 1,
        "contributions": [
          {{
            "philosopherName": {first_speaker_json},
            "response": "Condensed impactful response here",
            "wordCount": 45
          }}
        ]
      }}
    ],
    "videoNotes": "Brief notes on what makes this conversation compelling for video"
  }}
}}

Ensure the JSON is valid and complete.""",

    # ------------------------------------------------------------------
    # Director — turns a summary into a storyboard
    # ------------------------------------------------------------------
    "director_system": """You are an award-winning film director who specialises in short, cinematic
philosophy videos for vertical platforms (YouTube Shorts, TikTok, Reels).

Your job is to turn a condensed philosophical discussion into a shot-by-shot
storyboard that an image-generation model and a voice-over artist can follow
without further direction.

For every scene you:
- Choose a scene type: OPENING, DIALOGUE, TRANSITION or CLOSING.
- Write a vivid, self-contained image-generation prompt: subject, setting,
  era-appropriate costume, lighting, camera angle, mood and art style.
- Keep each philosopher visually consistent across scenes.
- Put spoken lines only in DIALOGUE scenes and attribute them to the speaker.
- Add short director notes on pacing, camera movement or sound.

Always answer with a single valid JSON object and nothing else.""",

    "director_request": """{summary}

SCRIPT TASK:
Create a video script for a {duration} vertical video from the discussion above.
Requirements:
- {opening_rule}
- {closing_rule}
- One DIALOGUE scene per contribution, in the original order, using the contribution text as dialogue
- Use TRANSITION scenes between rounds; transition style: {transition_style}
- Every scene MUST have an imagePrompt
- Scene durations must add up to roughly {duration}

Format your response as a JSON object with this structure:
{{
  "videoScript": {{
    "title": "Catchy video title",
    "description": "One or two sentence description for the video post",
    "estimatedDuration": "{duration}",
    "scenes": [
      {{
        "sceneNumber": 1,
        "type": "OPENING",
        "duration": "5 seconds",
        "imagePrompt": "Detailed image-generation prompt",
        "dialogue": null,
        "philosopherName": null,
        "directorNotes": "Slow push-in, ambient music fades up"
      }}
    ],
    "productionNotes": ["Note on music", "Note on captions"]
  }}
}}

Ensure the JSON is valid and complete.""",
}


# ── Registry class ────────────────────────────────────────────────────────────

class PromptRegistry:
    """Simple factory for retrieving prompt strings by name."""

    @staticmethod
    def get(name: str, **kwargs) -> str:
        """
        Fetch a prompt by key and optionally format it with keyword arguments.

        Example:
            PromptRegistry.get("conversation_initial", topic="What is justice?",
                               philosopher_name="Socrates", max_words=150)
        """
        if name not in PROMPTS:
            raise KeyError(f"Prompt '{name}' not found in registry. "
                           f"Available: {list(PROMPTS.keys())}")
        prompt = PROMPTS[name]
        # Format only if kwargs are supplied; templates with JSON examples
        # would otherwise keep their doubled braces.
        if kwargs:
            prompt = prompt.format(**kwargs)
        return prompt

    @staticmethod
    def list_prompts() -> list:
        """Return all registered prompt keys."""
        return list(PROMPTS.keys())
