"""
Client for the Metropolitan Museum of Art open access API.

Responses are cached in the Django cache: search results for
`MET_MUSEUM_SEARCH_TTL` seconds and object records for
`MET_MUSEUM_OBJECT_TTL` seconds. Failed lookups are never cached.

Example:
    >>> client = MetMuseumClient()
    >>> client.search("sunflowers")["total"]
    57
    >>> client.get_object(436524)["title"]
    'Sunflowers'
"""

import hashlib
import logging
from typing import Optional

import requests
from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

USER_AGENT = "artvault/0.1 (+https://collectionapi.metmuseum.org)"


class MetMuseumError(Exception):
    """The museum API could not be reached or returned an unreadable body."""


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _digest(*parts) -> str:
    return hashlib.md5("|".join(str(part) for part in parts).encode()).hexdigest()


class MetMuseumClient:
    """
    Thin, cached wrapper around the museum's REST endpoints.

    Methods:
        search(q, has_images):
            Object ids matching a free-text query.

        get_object(object_id):
            One object record, or None if the museum does not know it.

        objects_by_period(department_ids, date_begin, date_end, has_images):
            Object ids from some departments within a date range.

        get_batch(ids):
            Object records for up to `MET_MUSEUM_BATCH_LIMIT` ids; misses
            and failures are skipped.
    """

    def __init__(self, base_url: Optional[str] = None, session=None):
        self.base_url = (base_url or settings.MET_MUSEUM_BASE_URL).rstrip("/")
        self.session = session or requests.Session()

    def _get(self, path: str, params=None, timeout: int = 10) -> Optional[dict]:
        """
        GET `path` and decode the JSON body.

        Returns None when the museum answers with a non-2xx status.

        Raises:
            MetMuseumError: On network errors or a body that is not JSON.
        """

        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                timeout=timeout,
            )
        except requests.RequestException as exc:
            raise MetMuseumError(f"Request to {url} failed: {exc}") from exc

        if not response.ok:
            logger.warning("Met Museum %s answered %s", url, response.status_code)
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise MetMuseumError(f"Invalid JSON from {url}") from exc

    @staticmethod
    def _cached(key: str, ttl: int, fetch) -> Optional[dict]:
        data = cache.get(key)
        if data is not None:
            return data

        data = fetch()
        if data:
            cache.set(key, data, timeout=ttl)
        return data

    def search(self, q: str = "*", has_images: bool = True) -> Optional[dict]:
        return self._cached(
            f"met:search:{_digest(q, has_images)}",
            settings.MET_MUSEUM_SEARCH_TTL,
            lambda: self._get(
                "search", params={"q": q, "hasImages": _flag(has_images)}, timeout=15
            ),
        )

    def get_object(self, object_id, timeout: int = 10, ttl: Optional[int] = None):
        ttl = settings.MET_MUSEUM_OBJECT_TTL if ttl is None else ttl
        return self._cached(
            f"met:object:{object_id}",
            ttl,
            lambda: self._get(f"objects/{object_id}", timeout=timeout),
        )

    def objects_by_period(
        self,
        department_ids: str = "11",
        date_begin: int = -3000,
        date_end: int = 2024,
        has_images: bool = True,
    ) -> Optional[dict]:
        params = {
            "departmentIds": department_ids,
            "dateBegin": date_begin,
            "dateEnd": date_end,
            "hasImages": _flag(has_images),
            "q": "*",
        }
        return self._cached(
            f"met:period:{_digest(department_ids, date_begin, date_end, has_images)}",
            settings.MET_MUSEUM_SEARCH_TTL,
            lambda: self._get("search", params=params, timeout=15),
        )

    def get_batch(self, ids) -> list:
        results = []
        for object_id in list(ids)[: settings.MET_MUSEUM_BATCH_LIMIT]:
            try:
                data = self.get_object(
                    object_id, timeout=5, ttl=settings.MET_MUSEUM_SEARCH_TTL
                )
            except MetMuseumError:
                logger.warning("Skipping Met Museum object %s", object_id, exc_info=True)
                continue
            if data:
                results.append(data)
        return results
