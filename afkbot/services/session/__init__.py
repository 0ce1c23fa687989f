"""Session agents and the orchestrator that runs them."""

from .agent import AgentState, SessionAgent
from .orchestrator import AfkOrchestrator, ExitCode

__all__ = ["AfkOrchestrator", "AgentState", "ExitCode", "SessionAgent"]
