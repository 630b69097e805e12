"""
Contentful boundary layer.

Exports:
  - ContentfulClient: GraphQL Content API client
  - CmsArticle, CmsArticleSummary: Article shapes
  - extract_plain_text, truncate_to_token_limit: Rich text helpers

Dependencies: httpx, tenacity
System role: Content source adapter
"""

from lumen.boundary.contentful.client import ContentfulClient
from lumen.boundary.contentful.models import CmsArticle, CmsArticleSummary
from lumen.boundary.contentful.rich_text import extract_plain_text, truncate_to_token_limit

__all__ = [
    "ContentfulClient",
    "CmsArticle",
    "CmsArticleSummary",
    "extract_plain_text",
    "truncate_to_token_limit",
]
