"""
Nightfall: night-action and day-voting resolution for a Mafia-style party game.
"""

__version__ = "0.1.0"
