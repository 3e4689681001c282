import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from storefront.cart.engine import Cart
from storefront.utils.log_setup import get_logger

log = get_logger("cart")


class CartStore:
    """
    Guest carts keyed by the cart_uuid cookie.

    One instance lives on the FastAPI app (app.state.carts) and is handed to
    routes through a dependency, so each cart has a single owner.
    """

    def __init__(self):
        self._carts: Dict[str, Cart] = {}
        self._cart_locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._carts)

    def get(self, cart_uuid: Optional[str]) -> Optional[Cart]:
        if not cart_uuid:
            return None
        with self._lock:
            return self._carts.get(cart_uuid)

    def get_or_create(self, cart_uuid: Optional[str] = None) -> Cart:
        with self._lock:
            if cart_uuid and cart_uuid in self._carts:
                return self._carts[cart_uuid]
            # unknown or missing cookie: start a fresh cart
            new_uuid = uuid.uuid4().hex
            cart = Cart(cart_uuid=new_uuid)
            self._carts[new_uuid] = cart
            log.debug(f"created cart {new_uuid}")
            return cart

    def lock(self, cart_uuid: str) -> threading.Lock:
        """Per-cart lock for read-modify-write sequences on one cart."""
        with self._lock:
            return self._cart_locks.setdefault(cart_uuid, threading.Lock())

    def drop(self, cart_uuid: str) -> None:
        with self._lock:
            self._carts.pop(cart_uuid, None)
            self._cart_locks.pop(cart_uuid, None)

    def expire_idle(self, ttl_seconds: int) -> List[str]:
        cutoff = datetime.now(timezone.utc) - timedelta(seconds=ttl_seconds)
        with self._lock:
            stale = [k for k, c in self._carts.items() if c.last_touched < cutoff]
            for k in stale:
                del self._carts[k]
                self._cart_locks.pop(k, None)
        if stale:
            log.info(f"expired {len(stale)} idle carts")
        return stale
