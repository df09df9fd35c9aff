"""Vocabulary companion service: images, example phrases and explanations, exported to Anki."""

__version__ = "0.1.0"
