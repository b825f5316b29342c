"""
Health check endpoint.

Public route for load balancers and uptime checks.  It reports the
application version and whether the database answers a trivial query.
"""

import logging
import sqlite3

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from blog_api.app.core.db import get_connection


logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health(request: Request):
    try:
        conn = get_connection()
        try:
            conn.execute("SELECT 1").fetchone()
        finally:
            conn.close()
        database = "ok"
    except sqlite3.Error as e:
        logger.warning("Health check could not reach the database: %s", e)
        database = "unavailable"
    body = HealthResponse(
        status="ok" if database == "ok" else "degraded",
        version=request.app.version,
        database=database,
    )
    if database != "ok":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
