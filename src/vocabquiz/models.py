from enum import Enum
from typing import List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class QuizMode(str, Enum):
    MENU = "menu"
    SYNONYMS = "synonyms"
    ODD_ONE_OUT = "odd_one_out"
    ANALOGIES = "analogies"


class Relation(str, Enum):
    """The kind of sub-config a question is built from."""

    SYNONYMS = "synonyms"
    ANTONYMS = "antonyms"
    ODD_ONE_OUT = "odd_one_out"
    ANALOGIES = "analogies"


# Sub-configs each quiz mode can draw a question from
MODE_RELATIONS = {
    QuizMode.SYNONYMS: (Relation.SYNONYMS, Relation.ANTONYMS),
    QuizMode.ODD_ONE_OUT: (Relation.ODD_ONE_OUT,),
    QuizMode.ANALOGIES: (Relation.ANALOGIES,),
}


class QuestionType(str, Enum):
    # Antonym questions are still reported as "synonym"
    SYNONYM = "synonym"
    ODD_ONE_OUT = "odd_one_out"
    ANALOGY = "analogy"


# --- Catalog Models ---
class ChoiceSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    choices: Tuple[str, ...]
    correct: str

    @model_validator(mode="after")
    def check_choices(self):
        if len(self.choices) < 2:
            raise ValueError("choices must hold at least 2 entries")
        if len(set(self.choices)) != len(self.choices):
            raise ValueError("choices must not contain duplicates")
        if self.correct not in self.choices:
            raise ValueError(f"correct answer '{self.correct}' is not one of the choices")
        return self


class AnalogySet(ChoiceSet):
    first: str
    second: str
    relation: str


class WordEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    synonyms: Optional[ChoiceSet] = None
    antonyms: Optional[ChoiceSet] = None
    odd_one_out: Optional[ChoiceSet] = None
    analogies: Optional[AnalogySet] = None

    def config_for(self, relation: Relation) -> Optional[ChoiceSet]:
        """Returns the sub-config for ``relation`` or None when the word has none."""
        if relation is Relation.SYNONYMS:
            return self.synonyms
        if relation is Relation.ANTONYMS:
            return self.antonyms
        if relation is Relation.ODD_ONE_OUT:
            return self.odd_one_out
        if relation is Relation.ANALOGIES:
            return self.analogies
        raise ValueError(f"Unknown relation: {relation}")


# --- Session Models ---
class Question(BaseModel):
    type: QuestionType
    relation: Relation
    focus_word: str
    prompt_text: str
    options: List[str]
    correct_answer: str
    explanation_text: str


class Score(BaseModel):
    correct: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    @computed_field
    @property
    def percentage(self) -> int:
        return round((self.correct / self.total) * 100) if self.total > 0 else 0


class Feedback(BaseModel):
    is_correct: bool
    explanation: str
    selected_answer: str
    correct_answer: str


class SessionState(BaseModel):
    mode: QuizMode = QuizMode.MENU
    used_words: Set[str] = Field(default_factory=set)
    score: Score = Field(default_factory=Score)
    current_question: Optional[Question] = None
    feedback: Optional[Feedback] = None
