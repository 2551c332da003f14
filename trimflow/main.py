import logging

from fastapi import FastAPI

from trimflow.api.payments import router as payments_router
from trimflow.api.v1.auth import router as auth_router
from trimflow.api.v1.bookings import router as bookings_router
from trimflow.api.v1.dashboard import router as dashboard_router
from trimflow.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "service_id", "status", "amount", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking", version="1.0.0")

app.include_router(bookings_router, prefix="/api/v1", tags=["bookings"])
app.include_router(auth_router, prefix="/api/v1", tags=["auth"])
app.include_router(dashboard_router, prefix="/api/v1", tags=["dashboard"])
app.include_router(payments_router, tags=["payments"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
