from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from raumbuchung.routers import restaurants, reservations, reporting
from raumbuchung.config import settings
from raumbuchung.exception_handlers import register_exception_handlers
from raumbuchung.utils.logging_config import setup_logging
from raumbuchung.middleware.logging_middleware import log_requests


logger = setup_logging()
logger.info("Application starting...")
app = FastAPI(title=settings.app_name, debug=settings.debug)

app.middleware("http")(log_requests)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(restaurants.router)
app.include_router(reservations.router)
app.include_router(reporting.router)

@app.get("/")
def root() -> dict:
        return {"message": "Raumbuchung läuft!", "app": settings.app_name}

@app.get("/health")
def health() -> dict:
        return {"status": "ok"}
