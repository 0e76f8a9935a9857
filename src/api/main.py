from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.config import load_config
from src.api.routers import babies, health, health_monitor, notifications, users
from src.api.services.health_monitor import health_monitor_loop
from src.api.state import get_state, init_state

openapi_tags = [
    {"name": "Health", "description": "Service health and liveness."},
    {"name": "Health Monitor", "description": "Health-alert evaluation for a baby's recent care history."},
    {"name": "Babies", "description": "Babies and their feeding, sleep and growth logs."},
    {"name": "Notifications", "description": "Per-user notification feed (health alerts land here)."},
    {"name": "Users", "description": "User role resolution."},
]

logger = logging.getLogger(__name__)

_config = load_config()

logging.basicConfig(
    level=getattr(logging, _config.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Baby Care Health API",
    description=(
        "Backend API for the baby-care tracker. Stores babies, care logs and notifications in MongoDB "
        "and evaluates health alerts on demand, with an optional scheduled sweep."
    ),
    version="1.0.0",
    openapi_tags=openapi_tags,
)

# Initialize typed app state (config + Mongo manager)
init_state(app, _config)


@app.on_event("startup")
async def _on_startup() -> None:
    """Startup hook: connect to Mongo, validate connectivity, ensure indexes, and start the sweep loop."""
    state = get_state(app)

    # Connect + verify early so misconfigured Mongo doesn't silently break requests.
    state.mongo.connect()
    if not state.mongo.ping():
        raise RuntimeError("Mongo connectivity check failed during startup. Verify BACKEND_MONGO_URI.")

    state.mongo.init_indexes()

    app.state._health_monitor_shutdown = asyncio.Event()
    state.health_monitor_task = asyncio.create_task(
        health_monitor_loop(state, app.state._health_monitor_shutdown)
    )


@app.on_event("shutdown")
async def _on_shutdown() -> None:
    """Shutdown hook: stop the sweep loop and close Mongo connections."""
    state = get_state(app)

    shutdown = getattr(app.state, "_health_monitor_shutdown", None)
    if shutdown is not None:
        shutdown.set()
    task = state.health_monitor_task
    if task is not None:
        try:
            await asyncio.wait_for(task, timeout=5.0)
        except Exception:
            logger.exception("Error stopping health monitor task")

    state.mongo.close()


# CORS: permissive by default; CORS_ALLOW_ORIGINS narrows it to an explicit list.
allowed_origins = list(_config.cors_allow_origins)
wildcard = "*" in allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if wildcard else allowed_origins,
    # Browsers reject credentialed requests against a wildcard origin.
    allow_credentials=not wildcard,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

app.include_router(health.router)
app.include_router(health_monitor.router)
app.include_router(babies.router)
app.include_router(notifications.router)
app.include_router(users.router)
