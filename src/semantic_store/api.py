"""Semantic Store API service."""

import asyncio
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from pydantic import BaseModel, Field

from semantic_store.core.config import get_env_bool
from semantic_store.logging_config import configure_logging
from semantic_store.service import (
    DeleteResult,
    ItemResult,
    ItemsResult,
    SearchResults,
    SeedResult,
    StoreService,
)


class TextRequest(BaseModel):
    text: str


class SearchRequest(BaseModel):
    query: str
    start_date: Optional[str] = Field(default=None, description="YYYY-MM-DD")
    end_date: Optional[str] = Field(default=None, description="YYYY-MM-DD")


class SeedRequest(BaseModel):
    count: int = Field(default=100, gt=0, le=10_000)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start store initialization in the background; handlers report not-ready until it completes."""
    service: StoreService = app.state.service
    app.state.init_task = asyncio.create_task(service.initialize())
    yield
    await app.state.init_task
    service.close()


def create_app(service: Optional[StoreService] = None) -> FastAPI:
    """Build the API around a store service (a default one if omitted)."""
    app = FastAPI(
        title="Semantic Store API",
        description="Local semantic record store",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.service = service or StoreService()

    def get_service(request: Request) -> StoreService:
        return request.app.state.service

    @app.get("/api/records")
    async def list_records(request: Request) -> ItemsResult:
        """List records, newest first."""
        return await get_service(request).list_records()

    @app.post("/api/records")
    async def add_record(request: Request, body: TextRequest) -> ItemResult:
        """Add a record."""
        return await get_service(request).add(body.text)

    @app.put("/api/records/{record_id}")
    async def update_record(
        request: Request, record_id: str, body: TextRequest
    ) -> ItemResult:
        """Replace the text of a record."""
        return await get_service(request).update(record_id, body.text)

    @app.delete("/api/records/{record_id}")
    async def delete_record(request: Request, record_id: str) -> DeleteResult:
        """Delete a record."""
        return await get_service(request).delete(record_id)

    @app.post("/api/records/search")
    async def search_records(request: Request, body: SearchRequest) -> SearchResults:
        """Semantic search with optional date bounds."""
        return await get_service(request).search(
            body.query, body.start_date, body.end_date
        )

    @app.post("/api/records/seed")
    async def seed_records(request: Request, body: SeedRequest) -> SeedResult:
        """Insert generated demo records."""
        return await get_service(request).seed_demo(body.count)

    @app.get("/health")
    async def health_check(request: Request) -> Dict[str, Any]:
        """Health check including the initialization state."""
        service = get_service(request)
        return {
            "status": "healthy",
            "service": "semantic-store-api",
            "state": service.state.name.lower(),
            "error": service.initialization_error,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    configure_logging(verbose=get_env_bool("SEMANTIC_STORE_VERBOSE"))
    host = os.getenv("APP_HOST", "127.0.0.1")
    port = int(os.getenv("APP_PORT", "8080"))

    uvicorn.run(
        "semantic_store.api:app",
        host=host,
        port=port,
    )
