"""
Content agent configuration settings.

Chat model selection and generation limits for the Lumen agent.

Dependencies: pydantic, pydantic_settings
System role: LLM runtime configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AgentSettings(BaseSettings):
    """Settings for the conversational content agent."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AGENT_",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(default="gemini-2.5-flash", description="Google chat model ID")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    timeout_seconds: float = Field(default=30.0, description="Upper bound for one agent run")
