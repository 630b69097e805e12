"""
Chunk to article aggregation.

Pure functions shared by every vector store implementation.

Dependencies: lumen.boundary.vdb.vector_schemas
System role: Bridge from chunk-level matches to article-level answers
"""

from collections.abc import Sequence

from lumen.boundary.vdb.vector_schemas import ArticleSearchResult, MatchingChunk, ScoredChunk


def group_and_rank_by_article(rows: Sequence[ScoredChunk]) -> list[ArticleSearchResult]:
    """
    Group scored chunks by slug and rank the articles.

    Articles are ordered by their best chunk (max similarity), so one highly
    relevant passage surfaces its article even when the other chunks are
    weak matches. Article metadata is taken from the first row seen for
    the slug.

    Args:
        rows: Chunk rows from similarity_search

    Returns:
        list[ArticleSearchResult]: Articles best first, each with its matching
        chunks sorted by descending similarity
    """
    grouped: dict[str, list[ScoredChunk]] = {}
    for row in rows:
        grouped.setdefault(row.slug, []).append(row)

    results = []
    for slug, article_rows in grouped.items():
        similarities = [row.similarity for row in article_rows]
        first = article_rows[0]
        ranked = sorted(article_rows, key=lambda row: row.similarity, reverse=True)
        results.append(
            ArticleSearchResult(
                slug=slug,
                locale=first.locale,
                title=first.title,
                short_description=first.short_description,
                author_name=first.author_name,
                published_date=first.published_date,
                max_similarity=max(similarities),
                avg_similarity=sum(similarities) / len(similarities),
                matching_chunks=[
                    MatchingChunk(
                        content=row.chunk_content,
                        chunk_index=row.chunk_index,
                        similarity=row.similarity,
                    )
                    for row in ranked
                ],
            )
        )

    results.sort(key=lambda article: article.max_similarity, reverse=True)
    return results
