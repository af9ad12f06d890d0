"""Persistence for JustDad."""

from justdad.db.store import JournalStore

__all__ = ["JournalStore"]
