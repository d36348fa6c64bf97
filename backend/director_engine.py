"""
Director engine — turns a ConversationSummary into a scene-by-scene
VideoScript with one model call.

Like the summarizer it never writes to the state machine; failures reach
the caller as exceptions.

Parsing policy:
  - missing `videoScript`, `scenes`, or a scene's `imagePrompt` is fatal
  - scene `type` is matched case-insensitively; anything unrecognised
    becomes DIALOGUE
  - a missing `sceneNumber` becomes the scene's 1-based position
  - title, description, duration and production notes have defaults
"""

import logging

from backend.config import DIRECTOR_MAX_TOKENS, DIRECTOR_TEMPERATURE, LLMModel
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
from models.conversation import DirectorConfig
from models.summary import ConversationSummary, Scene, SceneType, VideoScript
from prompts.builder import build_director_prompt, format_summary_for_director
from prompts.registry import PromptRegistry

logger = logging.getLogger(__name__)

DEFAULT_SCENE_DURATION = "10 seconds"


def parse_scene_type(value) -> SceneType:
    try:
        return SceneType(str(value).strip().upper())
    except ValueError:
        # TODO: surface unknown scene types to the caller once the storyboard
        # schema is enforced with structured outputs.
        logger.warning("Unknown scene type %r, using DIALOGUE", value)
        return SceneType.DIALOGUE


class DirectorEngine:

    def __init__(self, llm_client: LLMClient, model: LLMModel):
        self._llm = llm_client
        self._model = model

    def create_video_script(self, summary: ConversationSummary, config: DirectorConfig) -> VideoScript:
        logger.info("Creating video script for '%s'", summary.condensed_topic)
        prompt = build_director_prompt(format_summary_for_director(summary), config)
        response = self._llm.chat_completion(
            model=self._model,
            system_prompt=PromptRegistry.get("director_system"),
            user_context=prompt,
            max_tokens=DIRECTOR_MAX_TOKENS,
            temperature=DIRECTOR_TEMPERATURE,
        )
        if not response.text or not response.text.strip():
            raise EmptyResponseError("Empty response from LLM while creating video script")

        script = parse_video_script_response(response.text, summary, config)
        logger.info("Video script created: %d scenes, %s", script.total_scenes, script.estimated_duration)
        return script


def parse_video_script_response(
    text: str, summary: ConversationSummary, config: DirectorConfig = DirectorConfig()
) -> VideoScript:
    try:
        data = load_json_object(text)
        script_obj = require_object(data, "videoScript")
        scenes_data = require_array(script_obj, "scenes")

        scenes = []
        for position, scene_obj in enumerate(scenes_data, start=1):
            if not isinstance(scene_obj, dict):
                raise ResponseParseError(f"Scene {position} is not an object")
            scene_number = optional_int(scene_obj, "sceneNumber")
            if scene_number is None:
                scene_number = position
            scenes.append(Scene(
                scene_number=scene_number,
                type=parse_scene_type(scene_obj.get("type", SceneType.DIALOGUE.value)),
                duration=optional_str(scene_obj, "duration") or DEFAULT_SCENE_DURATION,
                image_prompt=require_str(scene_obj, "imagePrompt", where=f"scene {scene_number}"),
                dialogue=optional_str(scene_obj, "dialogue"),
                philosopher_name=optional_str(scene_obj, "philosopherName"),
                director_notes=optional_str(scene_obj, "directorNotes"),
            ))

        notes = script_obj.get("productionNotes")
        production_notes = tuple(str(n) for n in notes) if isinstance(notes, list) else ()

        return VideoScript(
            title=optional_str(script_obj, "title")
            or f"Philosophical Discussion: {summary.condensed_topic}",
            description=optional_str(script_obj, "description")
            or f"A philosophical discussion between {', '.join(summary.participants)}",
            estimated_duration=optional_str(script_obj, "estimatedDuration") or config.estimated_duration,
            scenes=tuple(scenes),
            production_notes=production_notes,
        )
    except ResponseParseError as exc:
        logger.error("Failed to parse video script response: %s", exc)
        raise ResponseParseError(f"Failed to parse video script response: {exc}") from exc
