"""
Content tool API endpoints.

Routes: POST /tools/{tool_name} - Run searchKnowledgeBase, getArticleContent
or recommendRelatedArticles with a JSON argument object

Dependencies: lumen.core.agentic_system.content_agent
System role: HTTP binding of the retrieval tool surface
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from lumen.api.deps import get_content_tools
from lumen.core.agentic_system.content_agent import ContentTools

router = APIRouter(prefix="/tools", tags=["tools"])


@router.post("/{tool_name}")
async def run_tool(
    tool_name: str,
    arguments: dict[str, Any] = Body(default_factory=dict),
    content_tools: ContentTools = Depends(get_content_tools),
) -> dict[str, Any]:
    """
    Run a content tool.

    Raises:
        HTTPException(404): Unknown tool name
        HTTPException(422): Arguments do not match the tool schema
    """
    if tool_name not in content_tools.registry():
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")

    try:
        return await content_tools.invoke(tool_name, arguments)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False)) from e
