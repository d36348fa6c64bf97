"""
Philosopher catalog: the fixed roster of personas, loaded once at import.

Lookup by an unknown id raises UnknownPhilosopherError; there is no default
persona.
"""

from typing import Iterable, List, Optional

from models.conversation import Philosopher
from prompts.philosophers import PHILOSOPHER_PROMPTS


class UnknownPhilosopherError(KeyError):
    pass


def _persona(id: str, name: str, description: str, era: str, nationality: str) -> Philosopher:
    return Philosopher(
        id=id,
        name=name,
        description=description,
        system_prompt=PHILOSOPHER_PROMPTS[id].strip(),
        era=era,
        nationality=nationality,
    )


DEFAULT_PHILOSOPHERS = (
    _persona("socrates", "Socrates",
             "Ancient Greek philosopher known for the Socratic method and ethical inquiry",
             "Ancient Greece", "Greek"),
    _persona("nietzsche", "Friedrich Nietzsche",
             "German philosopher who challenged traditional morality and religion",
             "19th Century", "German"),
    _persona("kant", "Immanuel Kant",
             "German philosopher who developed critical philosophy and categorical imperatives",
             "18th Century", "German"),
    _persona("aristotle", "Aristotle",
             "Ancient Greek philosopher, student of Plato, tutor to Alexander the Great",
             "Ancient Greece", "Greek"),
    _persona("sartre", "Jean-Paul Sartre",
             "French existentialist philosopher emphasizing freedom and responsibility",
             "20th Century", "French"),
    _persona("confucius", "Confucius",
             "Chinese philosopher focused on ethics, morality, and social harmony",
             "Ancient China", "Chinese"),
    _persona("rousseau", "Jean-Jacques Rousseau",
             "Genevan philosopher of the social contract and natural freedom",
             "18th Century", "French"),
    _persona("marcus_aurelius", "Marcus Aurelius",
             "Roman Emperor and Stoic philosopher, author of the Meditations",
             "Ancient Rome", "Roman"),
    _persona("lao_tzu", "Lao Tzu",
             "Ancient Chinese sage and founder of Taoism",
             "Ancient China", "Chinese"),
)


class PhilosopherCatalog:
    """Read-only lookup over a fixed list of philosophers."""

    def __init__(self, philosophers: Iterable[Philosopher] = DEFAULT_PHILOSOPHERS):
        self._philosophers = tuple(philosophers)
        self._by_id = {p.id: p for p in self._philosophers}

    def get_all(self) -> List[Philosopher]:
        return list(self._philosophers)

    def get_by_id(self, id: str) -> Philosopher:
        try:
            return self._by_id[id]
        except KeyError:
            raise UnknownPhilosopherError(f"Unknown philosopher ID: {id}") from None

    def find_by_id(self, id: str) -> Optional[Philosopher]:
        return self._by_id.get(id)

    def get_by_era(self, era: str) -> List[Philosopher]:
        return [p for p in self._philosophers if p.era.lower() == era.lower()]

    def search(self, query: str) -> List[Philosopher]:
        """Case-insensitive substring match on name, description, era and nationality."""
        q = query.lower()
        return [
            p for p in self._philosophers
            if q in p.name.lower()
            or q in p.description.lower()
            or q in p.era.lower()
            or q in p.nationality.lower()
        ]
