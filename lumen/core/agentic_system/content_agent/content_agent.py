"""
Lumen content agent.

Binds the three content tools to a Gemini chat model with LangChain v1
create_agent and answers a conversation with the final model message.

Dependencies: langchain.agents, langchain_google_genai, langchain_core
System role: Conversational agent over the content archive
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from langchain.agents import create_agent
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from lumen.core.agentic_system.content_agent.content_agent_prompt import build_system_prompt
from lumen.core.agentic_system.content_agent.content_tools import (
    ContentTools,
    create_content_tools,
)

logger = logging.getLogger(__name__)


def _message_text(message: BaseMessage) -> str:
    # Gemini may return a list of content parts
    content = message.content
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content)


class ContentAgent:
    """Tool-calling agent that answers reader questions about the archive."""

    def __init__(
        self,
        content_tools: ContentTools,
        model: BaseChatModel | None = None,
        model_id: str = "gemini-2.5-flash",
        temperature: float = 0.3,
        timeout_seconds: float = 30.0,
    ) -> None:
        """
        Initialize the agent.

        Args:
            content_tools: Tool implementation bound to the vector store
            model: Chat model (a Gemini model is created when None)
            model_id: Google chat model ID
            temperature: Sampling temperature
            timeout_seconds: Upper bound for one agent run
        """
        if model is None:
            from langchain_google_genai import ChatGoogleGenerativeAI

            model = ChatGoogleGenerativeAI(model=model_id, temperature=temperature)

        self._model = model
        self._tools = create_content_tools(content_tools)
        self._timeout_seconds = timeout_seconds

    @property
    def tool_names(self) -> list[str]:
        return [tool.name for tool in self._tools]

    @staticmethod
    def to_messages(messages: Sequence[dict[str, Any]]) -> list[BaseMessage]:
        """Convert {role, content} dicts to LangChain messages (system turns are dropped)."""
        converted: list[BaseMessage] = []
        for message in messages:
            role = message.get("role")
            if role == "user":
                converted.append(HumanMessage(content=message.get("content", "")))
            elif role == "assistant":
                converted.append(AIMessage(content=message.get("content", "")))
        return converted

    async def ainvoke(
        self,
        messages: Sequence[dict[str, Any]],
        current_slug: str | None = None,
        locale: str | None = None,
    ) -> str:
        """
        Answer the conversation.

        Args:
            messages: Conversation as {role, content} dicts, oldest first
            current_slug: Slug of the page the reader is on
            locale: Locale of that page

        Returns:
            str: Final assistant answer

        Raises:
            asyncio.TimeoutError: When the run exceeds timeout_seconds
        """
        agent = create_agent(
            model=self._model,
            tools=self._tools,
            system_prompt=build_system_prompt(current_slug, locale),
        )
        history = self.to_messages(messages)
        logger.info(
            f"{__name__}:ainvoke - START messages={len(history)}",
            extra={"current_slug": current_slug, "locale": locale},
        )

        result = await asyncio.wait_for(
            agent.ainvoke({"messages": history}),
            timeout=self._timeout_seconds,
        )

        answer = _message_text(result["messages"][-1])
        logger.info(f"{__name__}:ainvoke - END answer_len={len(answer)}")
        return answer
