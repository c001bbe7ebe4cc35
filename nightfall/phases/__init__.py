"""
Game phases: night action resolution and day voting.
"""

from .night_phase import ActionRecord, Death, NightPhaseHandler, NightSummary
from .puppeteering import apply_puppeteering
from .voting import VoteResult, VotingHandler

__all__ = [
    'ActionRecord',
    'Death',
    'NightPhaseHandler',
    'NightSummary',
    'apply_puppeteering',
    'VoteResult',
    'VotingHandler',
]
