import asyncio
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Union

import httpx

Fetch = Callable[[httpx.Request], Awaitable[httpx.Response]]
RequestLike = Union[httpx.Request, httpx.URL, str]


class CacheError(Exception):
    pass


def cache_key(request: RequestLike) -> str:
    if isinstance(request, httpx.Request):
        return str(request.url)
    return str(httpx.URL(str(request)))


def bind_request(response: httpx.Response, request: httpx.Request) -> httpx.Response:
    """Attach request to a response that was built without one."""
    try:
        response.request
    except RuntimeError:
        response.request = request
    return response


def copy_response(response: httpx.Response, request: httpx.Request) -> httpx.Response:
    """Detached copy of an already-read response, safe to hand out twice."""
    # .content is already decoded, so the encoding headers no longer apply
    headers = [
        (k, v)
        for k, v in response.headers.multi_items()
        if k.lower() not in ("content-encoding", "content-length", "transfer-encoding")
    ]
    return httpx.Response(
        status_code=response.status_code,
        headers=headers,
        content=response.content,
        request=request,
    )


class Cache:
    """A single named cache store mapping GET request URLs to responses."""

    def __init__(self, name: str):
        self.name = name
        self._entries: Dict[str, httpx.Response] = {}

    async def match(self, request: RequestLike) -> Optional[httpx.Response]:
        if isinstance(request, httpx.Request) and request.method != "GET":
            return None
        hit = self._entries.get(cache_key(request))
        return copy_response(hit, hit.request) if hit is not None else None

    async def put(self, request: RequestLike, response: httpx.Response) -> None:
        if isinstance(request, httpx.Request) and request.method != "GET":
            raise CacheError(f"Request method '{request.method}' is unsupported")
        if not isinstance(request, httpx.Request):
            request = httpx.Request("GET", cache_key(request))
        self._entries[cache_key(request)] = copy_response(response, request)

    async def delete(self, request: RequestLike) -> bool:
        return self._entries.pop(cache_key(request), None) is not None

    async def keys(self) -> List[str]:
        return list(self._entries.keys())

    async def add_all(self, requests: Iterable[httpx.Request], fetch: Fetch) -> None:
        """
        Fetch every request and store the responses.

        All fetches complete before anything is written; if any fetch raises
        or returns a non-2xx status, CacheError is raised and nothing from
        this batch is stored.
        """
        requests = list(requests)
        try:
            responses = await asyncio.gather(*(fetch(r) for r in requests))
        except Exception as e:
            raise CacheError(f"Request failed while populating cache: {e}") from e
        responses = [bind_request(resp, req) for req, resp in zip(requests, responses)]
        for req, resp in zip(requests, responses):
            if not resp.is_success:
                raise CacheError(f"Request for {req.url} returned status {resp.status_code}")
        for req, resp in zip(requests, responses):
            await self.put(req, resp)


class CacheStorage:
    """
    In-memory stand-in for the host's named cache stores.
    Stores are kept in creation order, which is also the lookup order of match().
    """

    def __init__(self):
        self._caches: Dict[str, Cache] = {}

    async def open(self, name: str) -> Cache:
        if name not in self._caches:
            self._caches[name] = Cache(name)
        return self._caches[name]

    async def has(self, name: str) -> bool:
        return name in self._caches

    async def keys(self) -> List[str]:
        return list(self._caches.keys())

    async def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    async def match(self, request: RequestLike) -> Optional[httpx.Response]:
        for cache in list(self._caches.values()):
            hit = await cache.match(request)
            if hit is not None:
                return hit
        return None
