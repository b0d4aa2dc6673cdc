import logging
import random
from typing import List, Optional, Set, Tuple

from .builders import QuestionBuilderFactory
from .catalog import WordCatalog
from .config import settings
from .errors import CatalogEmpty, ConfigurationMissing, InvalidTransition
from .models import Feedback, Question, QuizMode, Relation, SessionState

logger = logging.getLogger(__name__)


class QuizEngine:
    """
    Runs one quiz session over a word catalog.

    The engine owns its SessionState. ``rng`` only needs ``random()`` and
    ``randrange(n)``; pass a seeded ``random.Random`` for repeatable sessions.
    """

    def __init__(
        self,
        catalog: WordCatalog,
        rng: Optional[random.Random] = None,
        retry_padding: int = settings.GENERATION_RETRY_PADDING,
    ):
        self.catalog = catalog
        self.rng = rng if rng is not None else random.Random()
        self.retry_padding = retry_padding
        self._state = SessionState()

    # --- Transitions ---
    def start_game(self, mode: QuizMode) -> None:
        mode = QuizMode(mode)
        if mode is QuizMode.MENU:
            raise InvalidTransition("A quiz cannot be started in menu mode")
        if len(self.catalog) == 0:
            raise CatalogEmpty()

        # Only replace the running session once the first question exists
        state = SessionState(mode=mode)
        state.current_question = self._generate_question(state)
        self._state = state
        logger.info(f"Quiz started [Mode: {mode.value}, Words: {len(self.catalog)}]")

    def submit_answer(self, answer: str) -> None:
        state = self._state
        if state.mode is QuizMode.MENU or state.current_question is None:
            raise InvalidTransition("No question is pending")
        if state.feedback is not None:
            raise InvalidTransition("The current question was already answered")

        question = state.current_question
        is_correct = answer == question.correct_answer
        state.score.total += 1
        if is_correct:
            state.score.correct += 1
        state.used_words.add(question.focus_word)
        state.feedback = Feedback(
            is_correct=is_correct,
            explanation=question.explanation_text,
            selected_answer=answer,
            correct_answer=question.correct_answer,
        )

    def next_question(self) -> None:
        state = self._state
        if state.feedback is None:
            raise InvalidTransition("Answer the current question first")

        question = self._generate_question(state)
        state.feedback = None
        state.current_question = question

    def back_to_menu(self) -> None:
        self._state = SessionState()

    def current_state(self) -> SessionState:
        return self._state.model_copy(deep=True)

    def coverage(self) -> float:
        """Percentage of the catalog used in the current run, to one decimal."""
        if len(self.catalog) == 0:
            return 0.0
        return round((len(self._state.used_words) / len(self.catalog)) * 100, 1)

    # --- Question generation ---
    def _generate_question(self, state: SessionState) -> Question:
        builder = QuestionBuilderFactory.create(state.mode)
        words = self.catalog.all_words()
        relations = builder.relations
        rejected: Set[Tuple[str, Relation]] = set()

        def untried_relations(word: str) -> List[Relation]:
            return [relation for relation in relations if (word, relation) not in rejected]

        def has_untried_relation(word: str) -> bool:
            return bool(untried_relations(word))

        max_attempts = len(words) * len(relations) + self.retry_padding
        for _ in range(max_attempts):
            available = [w for w in words if w not in state.used_words]
            if not available:
                logger.info(f"All {len(words)} words used in {state.mode.value} mode. Starting over.")
                state.used_words.clear()
                available = words

            candidates = [w for w in available if has_untried_relation(w)]
            if not candidates and state.used_words:
                logger.info(
                    f"No unused word fits {state.mode.value} mode. Starting over."
                )
                state.used_words.clear()
                candidates = [w for w in words if has_untried_relation(w)]
            if not candidates:
                break

            # Each untried (word, relation) pair is equally likely, as if the
            # draw restarted after every rejection
            weighted = [w for w in candidates for _ in untried_relations(w)]
            word = weighted[self.rng.randrange(len(weighted))]
            remaining = untried_relations(word)
            if len(remaining) == len(relations):
                relation = builder.pick_relation(self.rng)
            else:
                relation = remaining[self.rng.randrange(len(remaining))]

            entry = self.catalog.lookup(word)
            config = entry.config_for(relation) if entry is not None else None
            if config is None:
                logger.debug(f"Skipping {word}: no {relation.value} configuration.")
                rejected.add((word, relation))
                continue

            return builder.build(word, config, relation, self.rng)

        logger.error(f"Could not build a {state.mode.value} question from {len(words)} words.")
        raise ConfigurationMissing(state.mode)
