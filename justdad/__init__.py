"""JustDad - a private journaling CLI for divorced fathers."""

__version__ = "0.1.0"
