import json
import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd
from pydantic import ValidationError

from .models import MODE_RELATIONS, Relation, WordEntry

logger = logging.getLogger(__name__)

SUB_CONFIG_COLUMNS = [relation.value for relation in Relation]

# Used when the catalog file is missing
SAMPLE_WORDS: Dict[str, Dict[str, Any]] = {
    "abundant": {
        "synonyms": {"choices": ["plentiful", "scarce", "tiny", "empty"], "correct": "plentiful"},
        "antonyms": {"choices": ["scarce", "plentiful", "ample", "rich"], "correct": "scarce"},
        "odd_one_out": {"choices": ["plentiful", "ample", "copious", "scarce"], "correct": "scarce"},
    },
    "happy": {
        "synonyms": {"choices": ["joyful", "sad", "angry", "tired"], "correct": "joyful"},
        "antonyms": {"choices": ["miserable", "cheerful", "glad", "merry"], "correct": "miserable"},
        "odd_one_out": {"choices": ["joyful", "cheerful", "sad", "merry"], "correct": "sad"},
        "analogies": {
            "first": "hot",
            "second": "cold",
            "relation": "opposite",
            "choices": ["sad", "glad", "bright", "warm"],
            "correct": "sad",
        },
    },
    "light": {
        "antonyms": {"choices": ["heavy", "bright", "pale", "airy"], "correct": "heavy"},
        "analogies": {
            "first": "up",
            "second": "down",
            "relation": "opposite",
            "choices": ["dark", "lamp", "sun", "white"],
            "correct": "dark",
        },
    },
    "brave": {
        "synonyms": {"choices": ["courageous", "timid", "lazy", "rude"], "correct": "courageous"},
        "antonyms": {"choices": ["cowardly", "bold", "daring", "heroic"], "correct": "cowardly"},
        "analogies": {
            "first": "big",
            "second": "large",
            "relation": "synonym",
            "choices": ["bold", "afraid", "weak", "small"],
            "correct": "bold",
        },
    },
}


class WordCatalog:
    """Read-only mapping of word -> WordEntry, kept in insertion order."""

    def __init__(self, entries: Dict[str, WordEntry]):
        self._entries: Dict[str, WordEntry] = dict(entries)
        self._words: List[str] = list(self._entries)
        # Built on the first summary() call
        self._frame: Optional[pd.DataFrame] = None

    @classmethod
    def from_records(cls, raw: Dict[str, Any]) -> "WordCatalog":
        """Validates a ``{word: {sub-config kind: ...}}`` document, skipping bad rows."""
        if not isinstance(raw, dict):
            raise ValueError("Catalog document must be an object keyed by word")

        words = []
        rows = []
        for word, entry in raw.items():
            if not isinstance(entry, dict):
                logger.error(f"Skipping {word}: entry is not an object.")
                continue
            words.append(word)
            rows.append({column: entry.get(column) for column in SUB_CONFIG_COLUMNS})

        df = pd.DataFrame(rows, index=words, columns=SUB_CONFIG_COLUMNS)
        entries: Dict[str, WordEntry] = {}
        for word, row in df.iterrows():
            try:
                entries[word] = WordEntry.model_validate(row.dropna().to_dict())
            except ValidationError as e:
                logger.error(f"Skipping {word}: {e}")
        return cls(entries)

    def lookup(self, word: str) -> Optional[WordEntry]:
        return self._entries.get(word)

    def all_words(self) -> List[str]:
        return list(self._words)

    def summary(self) -> Dict[str, Any]:
        """Word count plus, per quiz mode, how many words can supply a question."""
        if self._frame is None:
            self._frame = pd.DataFrame(
                [
                    {relation.value: entry.config_for(relation) is not None for relation in Relation}
                    for entry in self._entries.values()
                ],
                index=self._words,
                columns=SUB_CONFIG_COLUMNS,
                dtype=bool,
            )

        modes = {}
        for mode, relations in MODE_RELATIONS.items():
            columns = [relation.value for relation in relations]
            modes[mode.value] = int(self._frame[columns].any(axis=1).sum())
        return {"word_count": len(self), "modes": modes}

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: str) -> bool:
        return word in self._entries


def load_catalog(path: str) -> WordCatalog:
    """Loads the word catalog from a JSON file."""
    if not os.path.exists(path):
        logger.warning(f"Catalog file {path} not found. Loading sample words.")
        return WordCatalog.from_records(SAMPLE_WORDS)

    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    catalog = WordCatalog.from_records(raw)
    logger.info(f"Loaded {len(catalog)} words from {path}")
    return catalog
