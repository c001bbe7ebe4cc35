"""
Agent implementations for Nightfall players.
"""

from .base_agent import AgentContext, BaseAgent
from .dummy_agent import DummyAgent

__all__ = ['AgentContext', 'BaseAgent', 'DummyAgent']
