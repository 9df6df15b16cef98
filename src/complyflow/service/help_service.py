"""Help centre article lookup."""

from typing import Any, Dict, List, Optional, Sequence

from complyflow.data.help_articles import HELP_ARTICLES
from complyflow.exception.api_exceptions import ResourceNotFoundError

SEARCH_FIELDS = ("title", "summary", "content")


class HelpService:
    def __init__(self, articles: Optional[Sequence[Dict[str, Any]]] = None):
        self.articles = list(articles if articles is not None else HELP_ARTICLES)

    def get_articles(self, query: Optional[str] = None) -> List[Dict[str, Any]]:
        """All articles, or those whose title, summary or content contain ``query``."""
        if not query:
            return list(self.articles)
        needle = query.lower()
        return [
            article
            for article in self.articles
            if any(needle in article[field].lower() for field in SEARCH_FIELDS)
        ]

    def get_article_by_id(self, article_id: str) -> Dict[str, Any]:
        """Fetch one article.

        Raises:
            ResourceNotFoundError: If no article has this ID
        """
        for article in self.articles:
            if article["id"] == article_id:
                return article
        raise ResourceNotFoundError("Help article", article_id)
