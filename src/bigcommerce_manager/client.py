"""
BigCommerce Management API client with retry and error handling
"""
import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence
from urllib.parse import urljoin

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import BigCommerceConfig

logger = logging.getLogger(__name__)

METAFIELDS_ENDPOINT = "v3/catalog/products/metafields"
STORE_ENDPOINT = "v2/store"
MAX_PAGE_SIZE = 250

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class BigCommerceAPIError(Exception):
    """Custom exception for BigCommerce API errors"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 response_text: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


class BigCommerceRetryableError(BigCommerceAPIError):
    """Rate limits, server errors and dropped connections"""
    pass


def _stop_after_configured_attempts(retry_state) -> bool:
    client = retry_state.args[0]
    return stop_after_attempt(client.config.max_retries)(retry_state)


class BigCommerceClient:
    """
    BigCommerce API client for product metafield operations
    """

    def __init__(self, config: BigCommerceConfig):
        self.config = config
        self.base_url = config.base_url

        self.headers = {
            "X-Auth-Token": config.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        logger.info(f"Initialized BigCommerce client for store {config.store_hash}")

    @retry(
        retry=retry_if_exception_type(BigCommerceRetryableError),
        stop=_stop_after_configured_attempts,
        wait=wait_exponential(multiplier=1, min=4, max=10),
        reraise=True
    )
    def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Make request to the BigCommerce API and decode the JSON body"""
        url = urljoin(self.base_url, endpoint)
        logger.debug(f"{method} {url} params={params}")

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=self.headers,
                json=data,
                params=params,
                timeout=self.config.request_timeout
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request failed: {e}")
            raise BigCommerceRetryableError(f"Request failed: {e}")

        if response.status_code == 429:
            reset_ms = response.headers.get("X-Rate-Limit-Time-Reset-Ms", "unknown")
            logger.warning(f"Rate limited by BigCommerce (reset in {reset_ms} ms)")

        if response.status_code >= 400:
            error_class = (
                BigCommerceRetryableError
                if response.status_code in RETRYABLE_STATUS_CODES
                else BigCommerceAPIError
            )
            raise error_class(
                f"{method} {endpoint} failed with {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
                response_text=response.text,
            )

        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise BigCommerceAPIError(
                f"{method} {endpoint} returned invalid JSON: {e}",
                status_code=response.status_code,
                response_text=response.text,
            )

    def get_store_info(self) -> Optional[Dict[str, Any]]:
        """Get store metadata, or None if the lookup fails"""
        try:
            return self._make_request("GET", STORE_ENDPOINT)
        except BigCommerceAPIError as e:
            logger.warning(f"Could not fetch store information: {e}")
            return None

    def create_product_metafields(self, metafields: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Bulk-create product metafields"""
        response = self._make_request("POST", METAFIELDS_ENDPOINT, data=list(metafields))
        if not isinstance(response, dict):
            return []
        return response.get("data", [])

    def delete_product_metafields(self, metafield_ids: Sequence[int]) -> None:
        """Bulk-delete product metafields by id"""
        self._make_request("DELETE", METAFIELDS_ENDPOINT, data=list(metafield_ids))

    def list_product_metafields(
        self,
        query: Optional[Dict[str, Any]] = None,
        page_size: int = MAX_PAGE_SIZE
    ) -> Iterator[List[Dict[str, Any]]]:
        """
        Yield pages of product metafields matching a filter query

        List values in the query (``key:in``, ``include_fields``...) are sent
        comma-separated as the API expects.
        """
        params = {
            name: ",".join(str(v) for v in value) if isinstance(value, (list, tuple)) else value
            for name, value in (query or {}).items()
        }
        params["limit"] = page_size
        page = 1

        while True:
            params["page"] = page
            response = self._make_request("GET", METAFIELDS_ENDPOINT, params=dict(params))
            if not isinstance(response, dict):
                break
            records = response.get("data", [])

            if records:
                yield records

            pagination = response.get("meta", {}).get("pagination", {})
            total_pages = pagination.get("total_pages", page)
            current_page = pagination.get("current_page", page)

            if not records or current_page >= total_pages:
                break
            page = current_page + 1

    def iter_product_metafields(
        self,
        query: Optional[Dict[str, Any]] = None,
        page_size: int = MAX_PAGE_SIZE
    ) -> Iterator[Dict[str, Any]]:
        """Iterate over every matching metafield record across pages"""
        for page in self.list_product_metafields(query, page_size=page_size):
            yield from page
