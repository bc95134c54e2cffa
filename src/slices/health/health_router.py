from fastapi import APIRouter
from typing import Dict, Any

from src.const import HEALTH_STATUS_ERROR, HEALTH_STATUS_HEALTHY, HEALTH_STATUS_OK, HEALTH_STATUS_UNHEALTHY
from src.shared.logging import LoggingManager


class HealthRouter:
    """Router for health endpoints."""

    def __init__(self, repository, object_cache):
        self.repository = repository
        self.object_cache = object_cache
        self.router = APIRouter(prefix="/health", tags=["health"])
        self.logger = LoggingManager.get_logger(__name__)
        self.router.get("", response_model=Dict[str, Any])(self.health_check)

    @classmethod
    def get_router(cls, repository, object_cache) -> APIRouter:
        """Get the router instance."""
        return cls(repository, object_cache).router

    async def health_check(self) -> Dict[str, Any]:
        """Check health of the service and its posts database."""
        database_status = HEALTH_STATUS_OK

        try:
            self.repository.ping()
        except Exception as e:
            database_status = HEALTH_STATUS_ERROR
            self.logger.warning(f"Posts database health check failed: {str(e)}")

        status = HEALTH_STATUS_HEALTHY if database_status == HEALTH_STATUS_OK else HEALTH_STATUS_UNHEALTHY
        self.logger.info(f"Health check result: {status} (database: {database_status})")

        return {
            "status": status,
            "service": HEALTH_STATUS_OK,
            "database": database_status,
            "object_cache": self.object_cache.get_stats()
        }
