"""HTTP request work items.

`http_request()` builds a work item that sends one request with an
`httpx.AsyncClient` and unwraps the service's response envelope: a JSON
object whose ``status`` field is ``"Success"``. Any other JSON body fails the
work item with `UnsuccessfulResponseError`; transport failures and error
status codes fail it with `RequestFailedError`.

Submitting these work items to a `SequentialQueue` keeps requests to a
service strictly one at a time, in submission order:

```py
queue = SequentialQueue("api")
saved = queue.submit(post("/jobs", data={"name": "nightly"}))
listed = queue.submit(get("/jobs", data={"page": 1}))
```
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Literal

import httpx

from tasklane import config

from .errors import RequestFailedError, UnsuccessfulResponseError

logger = logging.getLogger(__name__)

SUCCESS_STATUS = "Success"  # pragma: no mutate

ResponseType = Literal["json", "text", "bytes"]
Payload = Mapping[str, Any] | Callable[[], Mapping[str, Any]] | None

_RESPONSE_TYPES = ("json", "text", "bytes")

_default_client: httpx.AsyncClient | None = None


class Method(enum.StrEnum):
    """HTTP methods supported by `http_request`."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# ``data`` travels as query parameters for these, as a JSON body otherwise.
_QUERY_METHODS = frozenset({Method.GET, Method.DELETE})


def init_client(**options: Any) -> httpx.AsyncClient:
    """Create the client shared by HTTP work items that are not given one.

    Args:
        **options: Passed to `httpx.AsyncClient` (``base_url``, ``headers``,
            ``transport``, ...). ``timeout`` defaults to
            `config.get_http_timeout()`.

    Returns:
        The new client. The caller owns it and should ``aclose()`` it.
    """
    global _default_client  # pylint: disable=global-statement
    options.setdefault("timeout", config.get_http_timeout())
    _default_client = httpx.AsyncClient(**options)
    logger.debug(
        "Default HTTP client initialised (base_url=%r)", options.get("base_url")
    )
    return _default_client


def http_request(
    url: str,
    *,
    method: Method | str = Method.GET,
    data: Payload = None,
    headers: Mapping[str, str] | None = None,
    before: Callable[[], object] | None = None,
    after: Callable[[], object] | None = None,
    response_type: ResponseType = "json",
    client: httpx.AsyncClient | None = None,
) -> Callable[[], Awaitable[Any]]:
    """Build a work item that sends one HTTP request.

    Nothing is sent until the returned callable is invoked (normally by a
    task queue).

    Args:
        url: Absolute URL, or a path relative to the client's ``base_url``.
        method: One of `Method`; plain strings are accepted in any case.
        data: Query parameters (GET, DELETE) or JSON body (POST, PUT). A
            callable is evaluated when the request is sent, not when the work
            item is built.
        headers: Extra request headers.
        before: Called right before the request is sent.
        after: Called once the request has finished, whether it succeeded
            or failed.
        response_type: ``"json"`` checks the response envelope and returns
            the decoded object; ``"text"`` and ``"bytes"`` return the raw body
            without any check.
        client: Client to send with. Defaults to the one created by
            `init_client`, or a short-lived client when there is none.

    Returns:
        A nullary callable returning an awaitable of the response body.

    Raises:
        ValueError: If ``method`` or ``response_type`` is not supported.
    """
    try:
        verb = Method(str(method).upper())
    except ValueError as e:
        raise ValueError(f"Invalid HTTP method: {method}") from e
    if response_type not in _RESPONSE_TYPES:
        raise ValueError(f"Invalid response type: {response_type}")

    async def send_request() -> Any:
        payload = data() if callable(data) else data
        if before is not None:
            before()
        try:
            active = client or _default_client
            if active is not None:
                return await _send(active, verb, url, payload, headers, response_type)
            async with httpx.AsyncClient(timeout=config.get_http_timeout()) as temp:
                return await _send(temp, verb, url, payload, headers, response_type)
        finally:
            if after is not None:
                after()

    send_request.__qualname__ = f"http_request({verb} {url!r})"
    return send_request


def get(url: str, **kwargs: Any) -> Callable[[], Awaitable[Any]]:
    """Build a GET work item; see `http_request`."""
    return http_request(url, method=Method.GET, **kwargs)


def post(url: str, **kwargs: Any) -> Callable[[], Awaitable[Any]]:
    """Build a POST work item; see `http_request`."""
    return http_request(url, method=Method.POST, **kwargs)


def put(url: str, **kwargs: Any) -> Callable[[], Awaitable[Any]]:
    """Build a PUT work item; see `http_request`."""
    return http_request(url, method=Method.PUT, **kwargs)


def delete(url: str, **kwargs: Any) -> Callable[[], Awaitable[Any]]:
    """Build a DELETE work item; see `http_request`."""
    return http_request(url, method=Method.DELETE, **kwargs)


async def _send(
    client: httpx.AsyncClient,
    verb: Method,
    url: str,
    payload: Mapping[str, Any] | None,
    headers: Mapping[str, str] | None,
    response_type: ResponseType,
) -> Any:
    as_query = verb in _QUERY_METHODS
    logger.debug("%s %s", verb, url)
    try:
        response = await client.request(
            verb.value,
            url,
            params=payload if as_query else None,
            json=None if as_query else payload,
            headers=headers,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise RequestFailedError(
            verb, url, str(e), status_code=e.response.status_code
        ) from e
    except httpx.HTTPError as e:
        raise RequestFailedError(verb, url, str(e) or type(e).__name__) from e
    logger.debug("%s %s -> %d", verb, url, response.status_code)

    if response_type == "text":
        return response.text
    if response_type == "bytes":
        return response.content
    try:
        body = response.json()
    except ValueError as e:
        raise RequestFailedError(
            verb, url, "response is not valid JSON", status_code=response.status_code
        ) from e
    if isinstance(body, str):
        return body
    if not isinstance(body, Mapping) or body.get("status") != SUCCESS_STATUS:
        raise UnsuccessfulResponseError(verb, url, body)
    return body
