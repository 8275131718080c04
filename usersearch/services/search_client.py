"""Synchronous client for the paginated user search endpoint."""

import time
from typing import List, Optional

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from .. import config
from ..errors import ErrorKind, SearchError
from ..metrics import search_queries, search_request_latency, search_results_returned
from ..schemas import DEFAULT_ORDER_FIELD, ErrorResponse, SearchRequest, SearchResponse, User

logger = structlog.get_logger(__name__)

METRICS_SOURCE = "users"

_users_adapter = TypeAdapter(List[User])


class SearchClient:
    """Client for a user search service.

    One ``find_users`` call is one blocking GET; the client keeps no state
    between calls, so a single instance may be shared across threads.
    """

    def __init__(
        self,
        access_token: str,
        url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        max_limit: Optional[int] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize the client.

        Args:
            access_token: Credential sent in the ``AccessToken`` header.
            url: Search endpoint; defaults to ``USER_SEARCH_URL``.
            timeout: Request timeout in seconds; defaults to ``USER_SEARCH_TIMEOUT``.
            max_limit: Largest page size; bigger limits are clamped to it.
            http_client: Optional shared ``httpx.Client``. Its lifecycle stays
                with the caller; without one, each call opens its own client.
        """
        self.access_token = access_token
        self.url = url or config.SEARCH_SERVICE_URL
        if not self.url:
            raise ValueError("USER_SEARCH_URL must be set")
        self.timeout = config.SEARCH_TIMEOUT if timeout is None else timeout
        self.max_limit = config.MAX_PAGE_SIZE if max_limit is None else max_limit
        self._http_client = http_client

    def find_users(self, req: SearchRequest) -> SearchResponse:
        """Search users and report whether another page exists.

        Raises:
            SearchError: on invalid parameters, or when the call fails.
        """
        try:
            response = self._find_users(req)
        except SearchError as err:
            search_queries.labels(source=METRICS_SOURCE, status=err.kind.value).inc()
            raise
        search_queries.labels(source=METRICS_SOURCE, status="ok").inc()
        search_results_returned.labels(source=METRICS_SOURCE, status="ok").observe(len(response.users))
        return response

    def _find_users(self, req: SearchRequest) -> SearchResponse:
        if req.limit <= 0:
            raise SearchError(ErrorKind.INVALID_PARAMS, "limit must be > 0")
        limit = min(req.limit, self.max_limit)
        if req.offset < 0:
            raise SearchError(ErrorKind.INVALID_PARAMS, "offset must be > 0")

        # one extra row tells us whether a next page exists
        params = {
            "query": req.query,
            "order_field": req.order_field or DEFAULT_ORDER_FIELD,
            "order_by": int(req.order_by),
            "limit": limit + 1,
            "offset": req.offset,
        }
        resp = self._get(params)

        if resp.status_code == httpx.codes.UNAUTHORIZED:
            raise SearchError(ErrorKind.UNAUTHORIZED, "Bad AccessToken", resp.status_code)
        if resp.status_code == httpx.codes.BAD_REQUEST:
            self._raise_bad_request(resp)
        if resp.status_code != httpx.codes.OK:
            raise SearchError(ErrorKind.SERVER_FAULT, "SearchServer fatal error", resp.status_code)

        try:
            users = _users_adapter.validate_json(resp.content, strict=True)
        except ValidationError as e:
            raise SearchError(ErrorKind.DECODE_ERROR, f"cant unpack result json: {e}", resp.status_code) from e

        next_page = len(users) > limit
        if next_page:
            users = users[:limit]
        logger.debug("User search page decoded", returned=len(users), limit=limit, next_page=next_page)
        return SearchResponse(users=users, next_page=next_page)

    def _get(self, params: dict) -> httpx.Response:
        headers = {"AccessToken": self.access_token}
        logger.debug("Dispatching user search", url=self.url, **params)
        start_time = time.time()
        try:
            if self._http_client is not None:
                return self._http_client.get(self.url, params=params, headers=headers, timeout=self.timeout)
            with httpx.Client(timeout=self.timeout) as client:
                return client.get(self.url, params=params, headers=headers)
        except httpx.TimeoutException as e:
            raise SearchError(ErrorKind.TRANSPORT, f"timeout for {httpx.QueryParams(params)}") from e
        except httpx.DecodingError as e:
            raise SearchError(ErrorKind.DECODE_ERROR, f"cant unpack result json: {e}") from e
        except httpx.RequestError as e:
            raise SearchError(ErrorKind.TRANSPORT, f"unknown error {e}") from e
        finally:
            search_request_latency.labels(source=METRICS_SOURCE).observe(time.time() - start_time)

    @staticmethod
    def _raise_bad_request(resp: httpx.Response) -> None:
        try:
            body = ErrorResponse.model_validate_json(resp.content)
        except ValidationError as e:
            raise SearchError(ErrorKind.DECODE_ERROR, f"cant unpack error json: {e}", resp.status_code) from e
        raise SearchError(ErrorKind.INVALID_PARAMS, body.error, resp.status_code)
