# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.errors import SeatingConfigurationError, seating_configuration_error_handler
from app.core.venues import VENUE_CAPACITIES
from app.graphql.router import graphql_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Visit desk service starting; venues: %s",
        ", ".join(v.venue_id for v in VENUE_CAPACITIES.list_venues()),
    )
    yield
    logger.info("Visit desk service shutting down")


app = FastAPI(
    title="Visit Desk Service",
    version="1.0.0",
    description="""
        **Front desk visit management**

        Receptionists seat clients at tables, keep the waiting list and end
        visits; brokers check in their scheduled clients.

        ## Features

        * **Floor plan**: fixed table count per venue, optionally per floor
        * **Availability**: free/occupied tables derived from active visits
        * **Seating**: first free table or a chosen one, never double-booked
        * **Waiting list**: queue clients when a venue is full, promote them later
        * **Check-in**: automatic seating with waiting-list fallback

        ## Authentication

        All endpoints require a JWT via the `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(SeatingConfigurationError, seating_configuration_error_handler)

app.include_router(api_router, prefix="/api/v1")
app.include_router(graphql_router, prefix="/graphql")


@app.get("/")
def read_root():
    return {"status": "Visit Desk Service is running"}
