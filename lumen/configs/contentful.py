"""
Contentful CMS configuration.

Settings for the GraphQL Content API client and webhook verification.

Dependencies: pydantic_settings
System role: Content source and webhook ingress configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ContentfulSettings(BaseSettings):
    """Settings for Contentful content fetches and webhook handling."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CONTENTFUL_",
        case_sensitive=False,
        extra="ignore",
    )

    space_id: str = Field(default="", description="Contentful space ID")
    environment: str = Field(default="master", description="Contentful environment")
    access_token: str = Field(default="", description="Content Delivery API token")
    graphql_url: str = Field(
        default="https://graphql.contentful.com/content/v1/spaces/{space_id}/environments/{environment}",
        description="GraphQL endpoint template",
    )
    content_type: str = Field(
        default="pageBlogPost",
        description="Content type ID of the articles that get embedded",
    )
    collection_limit: int = Field(
        default=100,
        description="Maximum number of articles fetched per collection query",
    )
    timeout_seconds: float = Field(default=15.0, description="HTTP timeout for CMS requests")

    webhook_secret: str | None = Field(
        default=None,
        description="Shared secret for webhook request signing (verification disabled if unset)",
    )
    webhook_ttl_seconds: int = Field(
        default=30,
        description="Maximum accepted age of a signed webhook request",
    )
    webhook_delete_on_unpublish: bool = Field(
        default=False,
        description="Delete embeddings when an entry is unpublished or deleted",
    )

    @property
    def endpoint(self) -> str:
        """
        Resolve the GraphQL endpoint for the configured space.

        Returns:
            str: Fully-qualified GraphQL URL
        """
        return self.graphql_url.format(
            space_id=self.space_id,
            environment=self.environment,
        )
