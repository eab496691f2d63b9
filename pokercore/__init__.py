"""Poker building blocks: cards, decks, players, hand evaluation, lowball and Omaha, and betting flow."""

__version__ = "1.0.0"