"""Deterministic topic-formation engine for the daily AI briefing.

Turns a batch of already-fetched feed items into a ranked, diversity-capped
briefing plus an overflow queue, using an explainable trust model.
"""

__version__ = "0.1.0"
