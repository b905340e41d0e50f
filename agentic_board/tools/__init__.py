"""
Tools module for external collaborators:
- TextGenerator implementations used by agents to produce artifacts
"""

from .generator import TextGenerator, OpenAIGenerator, ScriptedGenerator

__all__ = ["TextGenerator", "OpenAIGenerator", "ScriptedGenerator"]
