"""Helpers for fetching the plot corpus and sentiment lexicon."""
