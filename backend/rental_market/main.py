import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rental_market.core.config import settings
from rental_market.core.errors import register_exception_handlers
from rental_market.db.base import Base
from rental_market.db.session import engine
from rental_market.api.routers import (
    auth as auth_router,
    users as users_router,
    rental_types as rental_types_router,
    rental_items as rental_items_router,
    rental_requests as rental_requests_router,
    dashboard as dashboard_router,
)

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(title=settings.PROJECT_NAME)

# ---------------------------
# CORS
# ---------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Domain errors -> HTTP
# ---------------------------
register_exception_handlers(app)

# ---------------------------
# Startup
# ---------------------------
@app.on_event("startup")
async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

# ---------------------------
# Routers
# ---------------------------
app.include_router(auth_router.router, prefix="/api/auth", tags=["auth"])
app.include_router(users_router.router, prefix="/api/users", tags=["users"])
app.include_router(rental_types_router.router, prefix="/api/rental-types", tags=["rental-types"])
app.include_router(rental_items_router.router, prefix="/api/rental-items", tags=["rental-items"])
app.include_router(rental_requests_router.router, prefix="/api/rental-requests", tags=["rental-requests"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["dashboard"])

# ---------------------------
# Health check
# ---------------------------
@app.get("/ping")
async def ping():
    return {"status": "ok"}

# ---------------------------
# Run
# ---------------------------
if __name__ == "__main__":
    uvicorn.run("rental_market.main:app", host="0.0.0.0", port=8000, reload=True)
