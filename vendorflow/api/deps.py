"""
API dependencies - shared across all routes.
"""
from typing import Optional

from fastapi import Header, Query


def get_agent_id(
    agent_id: Optional[str] = Query(None, description="Agent the request acts for"),
    x_agent_id: Optional[str] = Header(None)
) -> Optional[str]:
    """Agent identity from the query string, falling back to the X-Agent-Id header."""
    return agent_id or x_agent_id or None
