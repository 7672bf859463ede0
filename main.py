import os

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shared.config.database import engine, Base
from shared.errors import register_error_handlers
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.auth_service import models as auth_models
from services.item_service import models as item_models
from services.wishlist_service import models as wishlist_models
from services.order_service import models as order_models
from services.payment_service import models as payment_models
from services.feedback_service import models as feedback_models

from services.auth_service.router import router as auth_router
from services.item_service.router import router as item_router
from services.wishlist_service.router import router as wishlist_router
from services.order_service.router import router as order_router
from services.payment_service.router import router as payment_router, card_router
from services.feedback_service.router import router as feedback_router
from services.admin_service.router import router as admin_router

app = FastAPI(
    title="Circula Marketplace",
    version="1.0.0",
    description="Second-hand marketplace: listings, wishlists, orders, simulated card payments.",
)

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, os.getenv("SERVICE_NAME", "circula"))

# --- SECURITY & ERRORS ---
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_error_handlers(app)

app.include_router(auth_router)
app.include_router(item_router)
app.include_router(wishlist_router)
app.include_router(order_router)
app.include_router(payment_router)
app.include_router(card_router)
app.include_router(feedback_router)
app.include_router(admin_router)

@app.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "circula", "status": "running"}

@app.on_event("startup")
async def startup_event():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

@app.on_event("shutdown")
async def shutdown_event():
    await engine.dispose()
