from contextlib import asynccontextmanager

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from storefront.adapters.identity import build_identity_adapter
from storefront.api.health import router as health_router
from storefront.api.routes_admin import router as admin_router
from storefront.api.routes_cart import router as cart_router
from storefront.api.routes_catalogue import categories_router
from storefront.api.routes_catalogue import router as catalogue_router
from storefront.api.routes_checkout import router as checkout_router
from storefront.api.routes_order import router as order_router
from storefront.api.routes_user import router as user_router
from storefront.cart.store import CartStore
from storefront.config import settings
from storefront.db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    init_db(reset=settings.RESET_DB)

    # scheduler for expiring idle guest carts
    scheduler = BackgroundScheduler()

    def expire_job():
        app.state.carts.expire_idle(settings.CART_SESSION_TTL_SECONDS)

    scheduler.add_job(
        expire_job,
        "interval",
        seconds=settings.CART_SWEEP_INTERVAL_SECONDS,
        id="expire_carts",
    )
    scheduler.start()

    try:
        yield
    finally:
        scheduler.shutdown(wait=False)


app = FastAPI(title="Storefront - Backend", version="0.1.0", lifespan=lifespan)
app.state.carts = CartStore()
app.state.identity = build_identity_adapter()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
def root():
    return f"{settings.STORE_NAME} API is running"


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(categories_router, prefix="/api/categories", tags=["catalogue"])

app.include_router(user_router, tags=["users"])

app.include_router(order_router, prefix="/api/orders", tags=["orders"])

app.include_router(cart_router, tags=["cart"])

app.include_router(checkout_router, tags=["checkout"])

app.include_router(admin_router, tags=["admin"])
