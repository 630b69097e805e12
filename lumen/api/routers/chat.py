"""
Chat API endpoints.

Routes: POST /chat - Answer a conversation with the content agent

Dependencies: lumen.core.agentic_system.content_agent
System role: Conversational HTTP API
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from lumen.api.deps import get_content_agent
from lumen.core.agentic_system.content_agent import ContentAgent
from lumen.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    agent: ContentAgent = Depends(get_content_agent),
) -> ChatResponse:
    """
    Answer the conversation.

    Raises:
        HTTPException(504): Agent run timed out
        HTTPException(500): Agent failure
    """
    try:
        answer = await agent.ainvoke(
            [message.model_dump() for message in request.messages],
            current_slug=request.current_slug,
            locale=request.locale,
        )
    except asyncio.TimeoutError as e:
        logger.error(f"{__name__}:chat - Agent timed out")
        raise HTTPException(status_code=504, detail="The assistant took too long to answer") from e
    except Exception as e:
        logger.exception(f"{__name__}:chat - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate a response") from e

    return ChatResponse(answer=answer)
