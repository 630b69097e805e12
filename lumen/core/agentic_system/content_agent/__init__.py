"""
Lumen content agent.

Exports:
  - ContentTools, create_content_tools: Retrieval tool surface
  - ContentAgent: Tool-calling conversational agent
"""

from lumen.core.agentic_system.content_agent.content_agent import ContentAgent
from lumen.core.agentic_system.content_agent.content_tools import (
    ContentTools,
    create_content_tools,
)

__all__ = ["ContentAgent", "ContentTools", "create_content_tools"]
