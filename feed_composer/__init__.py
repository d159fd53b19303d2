"""Personalized content feed composition.

Fetches publisher sources and content, scores items against recent browsing
signals, and sequences the survivors into display cards.
"""

__version__ = "0.1.0"
