import asyncio
import enum
import time
from typing import Dict, List, Optional, Set

import httpx

from storefront.config import settings
from storefront.offline.cache import CacheError, CacheStorage, Fetch, bind_request
from storefront.offline.clients import Clients, Notification
from storefront.utils.log_setup import get_logger

log = get_logger("offline_cache")

CLEAR_CACHE = "CLEAR_CACHE"


class WorkerState(enum.Enum):
    PARSED = "parsed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ACTIVATING = "activating"
    ACTIVATED = "activated"
    REDUNDANT = "redundant"


class CacheInstallError(Exception):
    pass


class WorkerStateError(Exception):
    pass


class HttpxFetcher:
    """Network fetch backed by an httpx.AsyncClient; redirects are followed."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient()

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        return await self.client.send(request, follow_redirects=True)

    async def aclose(self):
        await self.client.aclose()


class OfflineCacheWorker:
    """
    Cache-first offline worker for the storefront's static assets.

    The host feeds lifecycle and network events in through dispatch():
    "install", "activate", "fetch", "message", "push" and
    "notificationclick". Every await inside a handler is a cache or network
    call; nothing else suspends.

    The generation tag (version) is fixed for the lifetime of the worker. A
    new deploy builds a new worker with a new tag, and its activation purges
    every other generation.
    """

    def __init__(
        self,
        fetch: Fetch,
        caches: Optional[CacheStorage] = None,
        clients: Optional[Clients] = None,
        version: Optional[str] = None,
        origin: Optional[str] = None,
        precache_urls: Optional[List[str]] = None,
        bypass_patterns: Optional[List[str]] = None,
        store_name: Optional[str] = None,
    ):
        self.fetch = fetch
        self.caches = caches if caches is not None else CacheStorage()
        self.clients = clients if clients is not None else Clients()
        self.version = version or settings.CACHE_VERSION
        self.origin = httpx.URL(origin or settings.APP_ORIGIN)
        self.precache_urls = list(precache_urls if precache_urls is not None else settings.PRECACHE_URLS)
        if bypass_patterns is None:
            bypass_patterns = settings.CACHE_BYPASS_PATTERNS + [settings.DATABASE_HOST]
        self.bypass_patterns = list(bypass_patterns)
        self.store_name = store_name or settings.STORE_NAME
        self.state = WorkerState.PARSED
        self.skip_waiting = False
        self._pending: Set[asyncio.Task] = set()
        self._handlers = {
            "install": self.on_install,
            "activate": self.on_activate,
            "fetch": self.on_fetch,
            "message": self.on_message,
            "push": self.on_push,
            "notificationclick": self.on_notification_click,
        }

    async def dispatch(self, event: str, *args):
        handler = self._handlers.get(event)
        if handler is None:
            raise ValueError(f"Unknown worker event: {event}")
        return await handler(*args)

    def _absolute(self, path: str) -> httpx.URL:
        return self.origin.join(path)

    def _bypassed(self, request: httpx.Request) -> bool:
        url = str(request.url)
        return any(p in url for p in self.bypass_patterns)

    def _same_origin(self, url: httpx.URL) -> bool:
        return (url.scheme, url.host, url.port) == (self.origin.scheme, self.origin.host, self.origin.port)

    def _cacheable(self, response: httpx.Response) -> bool:
        # only plain same-origin 200s; redirected and cross-origin responses are skipped
        if response is None or response.status_code != 200:
            return False
        if response.history:
            return False
        return self._same_origin(response.url)

    # lifecycle

    async def on_install(self) -> None:
        if self.state is not WorkerState.PARSED:
            raise WorkerStateError(f"Cannot install from state {self.state.value}")
        log.info("Installing...")
        self.state = WorkerState.INSTALLING
        # don't wait for old clients to let go of the previous generation
        self.skip_waiting = True
        try:
            cache = await self.caches.open(self.version)
            log.info(f"Caching files into {self.version}")
            requests = [httpx.Request("GET", self._absolute(p)) for p in self.precache_urls]
            await cache.add_all(requests, self.fetch)
        except CacheError as e:
            self.state = WorkerState.REDUNDANT
            log.error(f"Install failed: {e}")
            raise CacheInstallError(str(e)) from e
        self.state = WorkerState.INSTALLED

    async def on_activate(self) -> List[str]:
        if self.state is not WorkerState.INSTALLED:
            raise WorkerStateError(f"Cannot activate from state {self.state.value}")
        log.info("Activating...")
        self.state = WorkerState.ACTIVATING
        await self.clients.claim()
        removed = []
        for name in await self.caches.keys():
            if name != self.version:
                log.info(f"Clearing old cache {name}")
                await self.caches.delete(name)
                removed.append(name)
        self.state = WorkerState.ACTIVATED
        return removed

    # network

    async def on_fetch(self, request: httpx.Request) -> httpx.Response:
        if self.state is not WorkerState.ACTIVATED or self._bypassed(request):
            return await self.fetch(request)

        cached = await self.caches.match(request)
        if cached is not None:
            return cached

        response = bind_request(await self.fetch(request), request)
        if not self._cacheable(response):
            return response

        task = asyncio.ensure_future(self._store(request, response))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return response

    async def _store(self, request: httpx.Request, response: httpx.Response) -> None:
        try:
            cache = await self.caches.open(self.version)
            await cache.put(request, response)
        except CacheError as e:
            log.debug(f"Skipped caching {request.url}: {e}")
        except Exception as e:
            log.warning(f"Failed to cache {request.url}: {e!r}")

    async def drain(self) -> None:
        """Wait for background cache writes started by on_fetch."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # messaging and notifications

    async def on_message(self, data: Optional[Dict]) -> bool:
        if not data or data.get("type") != CLEAR_CACHE:
            return False
        log.info("Clearing cache by request")
        for name in await self.caches.keys():
            await self.caches.delete(name)
        return True

    async def on_push(self, text: Optional[str] = None) -> Notification:
        logo = settings.LOGO_PATH
        options = {
            "body": text if text else f"New notification from {self.store_name}",
            "icon": logo,
            "badge": logo,
            "vibrate": [100, 50, 100],
            "data": {
                "dateOfArrival": int(time.time() * 1000),
                "primaryKey": 1,
            },
            "actions": [
                {"action": "explore", "title": "Explore", "icon": "/images/checkmark.png"},
                {"action": "close", "title": "Close", "icon": "/images/xmark.png"},
            ],
        }
        return await self.clients.show_notification(self.store_name, options)

    async def on_notification_click(self, notification: Notification, action: Optional[str] = None) -> None:
        notification.close()
        if action == "explore":
            await self.clients.open_window("/")
