from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from .models import (
    MODE_RELATIONS,
    ChoiceSet,
    Question,
    QuestionType,
    QuizMode,
    Relation,
)


def shuffle_options(choices: Sequence[str], rng) -> List[str]:
    """Returns a uniformly shuffled copy of ``choices`` (Fisher-Yates)."""
    options = list(choices)
    for i in range(len(options) - 1, 0, -1):
        j = rng.randrange(i + 1)
        options[i], options[j] = options[j], options[i]
    return options


# --- Strategy Pattern: Question Builders ---
class QuestionBuilder(ABC):
    """Abstract Base Class for the per-mode question strategies."""

    mode: QuizMode
    question_type: QuestionType

    @property
    def relations(self) -> Tuple[Relation, ...]:
        return MODE_RELATIONS[self.mode]

    def pick_relation(self, rng) -> Relation:
        return self.relations[0]

    def build(self, word: str, config: ChoiceSet, relation: Relation, rng) -> Question:
        return Question(
            type=self.question_type,
            relation=relation,
            focus_word=word,
            prompt_text=self.prompt(word, config, relation),
            options=shuffle_options(config.choices, rng),
            correct_answer=config.correct,
            explanation_text=self.explanation(word, config, relation),
        )

    @abstractmethod
    def prompt(self, word: str, config: ChoiceSet, relation: Relation) -> str:
        pass

    @abstractmethod
    def explanation(self, word: str, config: ChoiceSet, relation: Relation) -> str:
        pass


class SynonymQuestionBuilder(QuestionBuilder):
    """Synonym or antonym question, chosen by a fair coin flip."""

    mode = QuizMode.SYNONYMS
    question_type = QuestionType.SYNONYM

    def pick_relation(self, rng) -> Relation:
        return Relation.ANTONYMS if rng.random() < 0.5 else Relation.SYNONYMS

    @staticmethod
    def _label(relation: Relation) -> str:
        return "antonym" if relation is Relation.ANTONYMS else "synonym"

    def prompt(self, word, config, relation):
        return f'What is a {self._label(relation)} for "{word}"?'

    def explanation(self, word, config, relation):
        return f'"{config.correct}" is a {self._label(relation)} of "{word}".'


class OddOneOutQuestionBuilder(QuestionBuilder):
    mode = QuizMode.ODD_ONE_OUT
    question_type = QuestionType.ODD_ONE_OUT

    def prompt(self, word, config, relation):
        return "Which word does NOT belong with the others?"

    def explanation(self, word, config, relation):
        return f'"{config.correct}" has the opposite meaning to the other words.'


class AnalogyQuestionBuilder(QuestionBuilder):
    mode = QuizMode.ANALOGIES
    question_type = QuestionType.ANALOGY

    def prompt(self, word, config, relation):
        return f"{config.first} is to {config.second} as {word} is to ___"

    def explanation(self, word, config, relation):
        return (
            f"{config.first} and {config.second} are {config.relation}s, "
            f"just as {word} and {config.correct} are {config.relation}s."
        )


class QuestionBuilderFactory:
    """Factory to select the builder for a quiz mode."""

    _builders = {
        QuizMode.SYNONYMS: SynonymQuestionBuilder,
        QuizMode.ODD_ONE_OUT: OddOneOutQuestionBuilder,
        QuizMode.ANALOGIES: AnalogyQuestionBuilder,
    }

    @classmethod
    def create(cls, mode: QuizMode) -> QuestionBuilder:
        try:
            return cls._builders[mode]()
        except KeyError:
            raise ValueError(f"No question builder for mode '{mode}'") from None
