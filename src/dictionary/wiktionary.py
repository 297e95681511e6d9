"""Word lookups against the French Wiktionary."""

import logging
from typing import Any, Dict

import requests
from pydantic import BaseModel

from .base import DictionaryLookup, LOOKUP_ERROR_MESSAGE
from .models import DictionaryResult


logger = logging.getLogger(__name__)

WIKTIONARY_API_URL = "https://fr.wiktionary.org/w/api.php"


class WiktionaryClient(BaseModel, DictionaryLookup):
    """
    Client for checking word existence on fr.wiktionary.org.

    A word exists when the MediaWiki query API returns a page for its
    lowercase title. Network and payload errors are reported in the
    result, never raised.
    """

    api_url: str = WIKTIONARY_API_URL
    timeout: float = 5.0
    user_agent: str = "chiffres-lettres/0.1"

    def page_url(self, word: str) -> str:
        """Human-facing page for a word."""
        return f"https://fr.wiktionary.org/wiki/{word.lower()}"

    def _query(self, word: str) -> Dict[str, Any]:
        params = {
            "action": "query",
            "titles": word.lower(),
            "format": "json",
        }
        response = requests.get(
            self.api_url,
            params=params,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _page_exists(payload: Dict[str, Any]) -> bool:
        """
        Read existence from a query payload.

        Raises:
            KeyError: If the payload has no pages
        """
        pages = payload["query"]["pages"]
        return any(
            page_id != "-1" and "missing" not in page and "invalid" not in page
            for page_id, page in pages.items()
        )

    def check_word(self, word: str) -> DictionaryResult:
        word = word.strip().upper()
        if not word:
            return DictionaryResult(word=word, exists=False)

        try:
            payload = self._query(word)
            exists = self._page_exists(payload)
        except requests.exceptions.RequestException as e:
            logger.warning("Wiktionary request failed for '%s': %s", word, e)
            return DictionaryResult(word=word, error=LOOKUP_ERROR_MESSAGE)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            logger.warning("Unexpected Wiktionary payload for '%s': %s", word, e)
            return DictionaryResult(word=word, error=LOOKUP_ERROR_MESSAGE)

        logger.debug("Wiktionary lookup '%s' -> exists=%s", word, exists)
        return DictionaryResult(word=word, exists=exists)
