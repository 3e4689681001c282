import argparse
import asyncio

import httpx

from storefront.config import settings
from storefront.offline.worker import CacheInstallError, HttpxFetcher, OfflineCacheWorker


async def run(origin: str, paths):
    async with httpx.AsyncClient(timeout=10.0) as client:
        worker = OfflineCacheWorker(fetch=HttpxFetcher(client), origin=origin)
        try:
            await worker.dispatch("install")
        except CacheInstallError as e:
            print(f"install failed: {e}")
            return 1
        removed = await worker.dispatch("activate")
        print(f"generation={worker.version} purged={removed}")

        for path in paths:
            res = await worker.dispatch("fetch", httpx.Request("GET", worker.origin.join(path)))
            print(f"{res.status_code} {path}")
        await worker.drain()

        cache = await worker.caches.open(worker.version)
        for key in await cache.keys():
            print("cached:", key)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Pre-warm the offline cache against a running storefront")
    parser.add_argument("--origin", default=settings.APP_ORIGIN)
    parser.add_argument("paths", nargs="*", help="extra root-relative paths to fetch through the worker")
    args = parser.parse_args()
    raise SystemExit(asyncio.run(run(args.origin, args.paths)))
