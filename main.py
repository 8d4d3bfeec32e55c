"""FastAPI app entry point for the Yokai Hunters Society sheet server."""

import logging
import random

from fastapi import FastAPI

from api.actors import router as actors_router
from api.rolls import router as rolls_router
from api.ws import router as ws_router
from config import TABLE_NAME
from engine.table import create_table
from logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Yokai Hunters Society",
    description="Character sheets and dice rolls for Yokai Hunters Society",
    version="0.1.0",
)

# One in-memory table per process
app.state.table = create_table(TABLE_NAME)
app.state.rng = random.Random()

app.include_router(actors_router, prefix="/actors", tags=["Actors"])
app.include_router(rolls_router, tags=["Rolls"])
app.include_router(ws_router, tags=["WebSocket"])

logger.info("Table %s is open", TABLE_NAME)


@app.get("/")
def root() -> dict:
    """Root endpoint returning server info."""
    return {"name": "Yokai Hunters Society", "version": "0.1.0", "status": "running"}


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"healthy": True}
