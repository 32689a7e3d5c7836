from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.health import router as health_router
from storefront.api.routes_admin import router as admin_router
from storefront.api.routes_cart import router as cart_router
from storefront.api.routes_catalogue import router as catalogue_router
from storefront.api.routes_notifications import router as notifications_router
from storefront.api.routes_order import router as order_router
from storefront.api.routes_users import profile_router, users_router
from storefront.api.routes_wishlist import router as wishlist_router
from storefront.config import settings
from storefront.db import init_db
from storefront.errors import install_exception_handlers
from storefront.utils.logging import configure_logging, get_logger

configure_logging(settings.LOG_LEVEL)
log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup; RESET_DB=1 drops and recreates every table
    init_db(reset=settings.RESET_DB)
    log.info("Storefront API started (environment=%s)", settings.ENVIRONMENT)
    yield


app = FastAPI(title="Storefront - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_exception_handlers(app)

app.include_router(health_router)
app.include_router(catalogue_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(wishlist_router)
app.include_router(notifications_router)
app.include_router(profile_router)
app.include_router(users_router)
app.include_router(admin_router)


@app.get("/", include_in_schema=False)
def root():
    return {"status": "success", "message": "API is running..."}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)
