"""
Remote Catalog Client

Queries the external college-finder service for institutions matching a
country and the student's aggregate score. Responses are passed through the
adapter's alias resolution before anything reaches the engine.

Retries are configured on the HTTP session; the engine itself never retries.
"""

import logging
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config import CATALOG_API_URL, CATALOG_API_TIMEOUT, CATALOG_API_RETRIES
from .adapter import transform_records, _safe_get
from .constants import canonical_country_name
from .contracts import Institution
from .exceptions import EmptyResultError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


def build_session(retries: int = CATALOG_API_RETRIES) -> requests.Session:
    """HTTP session retrying idempotent failures and gateway errors."""
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=0.5,
        status_forcelist=(502, 503, 504),
        allowed_methods=frozenset(["GET", "POST"]),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class CatalogClient:
    """
    Client for the college-finder service.

    Request body: {"country": <full country name>, "overall_normalised_score": <0-100>}
    Response body: {"results": {"colleges": [<institution-like record>, ...]}}
    """

    def __init__(
        self,
        base_url: str = CATALOG_API_URL,
        timeout: float = CATALOG_API_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or build_session()

    def find_colleges(self, country: str, overall_normalized_score: float) -> List[Institution]:
        """
        Fetch institutions for a country and score.

        Args:
            country: Country code or name (e.g. "USA", "United Kingdom")
            overall_normalized_score: Student's aggregate score (0-100)

        Returns:
            Institutions in provider order

        Raises:
            UpstreamUnavailableError: transport failure, bad status, malformed payload,
                or no usable records
            EmptyResultError: the service found no colleges
        """
        payload = {
            "country": canonical_country_name(country),
            "overall_normalised_score": overall_normalized_score,
        }
        logger.info(f"Querying catalog service for {payload['country']} (score={overall_normalized_score:.2f})")

        try:
            response = self.session.post(self.base_url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise UpstreamUnavailableError(f"Catalog service unreachable: {e}") from e

        if not response.ok:
            raise UpstreamUnavailableError(
                f"Catalog service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailableError("Catalog service returned a non-JSON body") from e

        colleges = _safe_get(data, "results", "colleges")
        if not isinstance(colleges, list):
            raise UpstreamUnavailableError("Catalog service response has no results.colleges list")

        if not colleges:
            raise EmptyResultError(
                "No universities found for your criteria. Try adjusting your scores "
                "or selecting a different country."
            )

        institutions = transform_records(colleges)
        if not institutions:
            raise UpstreamUnavailableError(
                f"Catalog service returned {len(colleges)} records but none were usable"
            )

        logger.info(f"Catalog service returned {len(institutions)} usable records of {len(colleges)}")
        return institutions
