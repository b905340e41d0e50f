"""
Agentic-Board: Multi-Agent Coordination over a Shared Message Board

Several agents collaborate on one feature request by reading and writing an
append-only board:
- UI/UX Design agent turns the request into a UI/UX spec
- Frontend Engineer agent plans the frontend from the UI/UX spec
- Backend Engineer agent plans the backend from the UI/UX spec
"""

__version__ = "0.1.0"
__author__ = "Agentic-Board Team"
