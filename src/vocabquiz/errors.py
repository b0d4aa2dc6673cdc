class QuizError(Exception):
    """Base class for errors raised by the quiz engine."""


class ConfigurationMissing(QuizError):
    """No catalog word can supply the sub-config the active mode needs."""

    def __init__(self, mode):
        self.mode = mode
        super().__init__(f"No word in the catalog has a configuration for mode '{mode.value}'")


class CatalogEmpty(QuizError):
    def __init__(self):
        super().__init__("Word catalog is empty")


class InvalidTransition(QuizError):
    """An operation was called while the session was in the wrong state."""
