"""Exceptions raised by JustDad."""


class JustDadError(Exception):
    """Base class for all JustDad errors."""


class ConfigError(JustDadError):
    """Raised when the configuration file cannot be loaded or is invalid."""


class EntryNotFoundError(JustDadError):
    """Raised when a journal entry does not exist in the store."""

    def __init__(self, entry_id: str):
        super().__init__(f"Journal entry not found: {entry_id}")
        self.entry_id = entry_id


class MigrationError(JustDadError):
    """Raised when legacy journal data cannot be imported."""
