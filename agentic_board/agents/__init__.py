"""
Agent module containing the three board agents:
- UIUXAgent: turns feature requests into UI/UX specs
- FrontendAgent: frontend implementation plans from UI/UX specs
- BackendAgent: backend designs from UI/UX specs
"""

from .base_agent import BaseAgent
from .manifest import CapabilityManifest
from .uiux import UIUXAgent
from .frontend import FrontendAgent
from .backend import BackendAgent

__all__ = ["BaseAgent", "CapabilityManifest", "UIUXAgent", "FrontendAgent", "BackendAgent"]
