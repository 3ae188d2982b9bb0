"""Session state management for MCP server."""
from dataclasses import dataclass, field
from typing import Dict, Optional

from cppgrep.core.interfaces import IFrontEnd
from cppgrep.parsers import get_frontend


@dataclass
class MCPSessionState:
    """Singleton state for MCP server session."""
    frontends: Dict[str, IFrontEnd] = field(default_factory=dict)
    runs: int = 0

    def frontend(self, name: str) -> IFrontEnd:
        """Get the front end for ``name``, creating it on first use."""
        if name not in self.frontends:
            self.frontends[name] = get_frontend(name)
        return self.frontends[name]


_state: Optional[MCPSessionState] = None


def get_state() -> MCPSessionState:
    """Get or create the singleton state instance."""
    global _state
    if _state is None:
        _state = MCPSessionState()
    return _state


def reset_state() -> None:
    """Reset the singleton state (useful for testing)."""
    global _state
    _state = None
