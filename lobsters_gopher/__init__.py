"""Gopher mirror of the Lobsters hottest stories."""

__version__ = "0.1.0"
