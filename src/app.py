"""Dispatch FastAPI application.

Serves the payment and notification handler registries over HTTP. Services
are built lazily from DispatchSettings on the first request.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dispatch.api import register_exception_handlers
from dispatch.config import get_settings
from dispatch.utils.logging import configure_logging
from notifications.api import notification_router
from notifications.notification import NotificationChannel
from payments.api import payment_router
from payments.payment import PaymentMethod

configure_logging()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Dispatch API",
    description="Pluggable payment and notification handlers",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(payment_router)
app.include_router(notification_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "environment": get_settings().environment,
            "payment_methods": [method.name for method in PaymentMethod],
            "notification_channels": [channel.name for channel in NotificationChannel],
        }
    )
