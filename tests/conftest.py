"""
Pytest configuration and fixtures for Sophia tests.
"""
import json

import pytest

from backend.config import GPT4_1_NANO, PROFILES, Settings
from backend.llm_client import LLMClient, LLMResponse
from backend.philosophers import PhilosopherCatalog
from backend.state_machine import ConversationStateManager
from backend.storage import ConversationStorage
from models.conversation import ConversationConfig


class FakeLLMClient(LLMClient):
    """
    Scripted LLMClient.  Each call pops the next item from `responses`:
    a string becomes the response text, an exception is raised.  When the
    script runs out, `default` is returned.  Every call is recorded.
    """

    def __init__(self, responses=None, default="A thoughtful reply."):
        self.responses = list(responses or [])
        self.default = default
        self.calls = []
        self.closed = False

    def chat_completion(self, model, system_prompt, user_context, max_tokens=1000, temperature=0.7):
        self.calls.append(dict(
            model=model,
            system_prompt=system_prompt,
            user_context=user_context,
            max_tokens=max_tokens,
            temperature=temperature,
        ))
        item = self.responses.pop(0) if self.responses else self.default
        if isinstance(item, BaseException):
            raise item
        return LLMResponse(text=item, prompt_tokens=10, completion_tokens=5)

    def close(self):
        self.closed = True


@pytest.fixture
def catalog():
    return PhilosopherCatalog()


@pytest.fixture
def socrates(catalog):
    return catalog.get_by_id("socrates")


@pytest.fixture
def kant(catalog):
    return catalog.get_by_id("kant")


@pytest.fixture
def justice_config(socrates, kant):
    return ConversationConfig(
        topic="What is justice?",
        participants=[socrates, kant],
        max_rounds=2,
        max_words_per_response=100,
    )


@pytest.fixture
def state_manager():
    return ConversationStateManager()


@pytest.fixture
def storage(tmp_path):
    return ConversationStorage(str(tmp_path / "conversations"))


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        profile=PROFILES["debug"],
        openai_api_key="sk-test-key-for-testing",
        storage_dir=str(tmp_path / "conversations"),
        turn_delay=0.0,
    )


@pytest.fixture
def model():
    return GPT4_1_NANO


@pytest.fixture
def summary_json():
    """Well-formed summarizer output for a Socrates / Kant discussion."""
    return json.dumps({
        "summary": {
            "originalTopic": "What is justice?",
            "condensedTopic": "Justice: virtue or duty?",
            "participants": ["Socrates", "Immanuel Kant"],
            "rounds": [
                {
                    "roundNumber": 1,
                    "contributions": [
                        {"philosopherName": "Socrates", "response": "Is justice not the health of the soul?", "wordCount": 8},
                        {"philosopherName": "Immanuel Kant", "response": "Justice is acting from duty alone.", "wordCount": 6},
                    ],
                },
                {
                    "roundNumber": 2,
                    "contributions": [
                        {"philosopherName": "Socrates", "response": "But whose duty, and who decides?", "wordCount": 6},
                        {"philosopherName": "Immanuel Kant", "response": "Reason decides, universally.", "wordCount": 3},
                    ],
                },
            ],
            "videoNotes": "Sharp contrast between virtue and duty",
        }
    })


@pytest.fixture
def video_script_json():
    """Well-formed director output with opening, dialogue and closing scenes."""
    return json.dumps({
        "videoScript": {
            "title": "Virtue vs Duty",
            "description": "Socrates and Kant clash over justice.",
            "estimatedDuration": "45 seconds",
            "scenes": [
                {"sceneNumber": 1, "type": "OPENING", "duration": "5 seconds",
                 "imagePrompt": "Marble agora at dawn", "dialogue": None,
                 "philosopherName": None, "directorNotes": "Slow push-in"},
                {"sceneNumber": 2, "type": "DIALOGUE", "duration": "10 seconds",
                 "imagePrompt": "Socrates in a white chiton, warm light",
                 "dialogue": "Is justice not the health of the soul?",
                 "philosopherName": "Socrates", "directorNotes": None},
                {"sceneNumber": 3, "type": "closing", "duration": "5 seconds",
                 "imagePrompt": "Empty agora at dusk"},
            ],
            "productionNotes": ["Soft lyre music", "Burned-in captions"],
        }
    })
