"""Base class for routers in the Media Library service."""

from abc import ABC, abstractmethod
from fastapi import APIRouter


class BaseRouter(ABC):
    """Base class for API routers backed by a chain."""

    chain_class = None
    tag = None

    def __init__(self, *chain_args):
        self.chain = self.chain_class(*chain_args)
        self.router = APIRouter(tags=[self.tag])
        self.add_routes()

    @abstractmethod
    def add_routes(self):
        """Add routes to the router."""
        pass

    @classmethod
    def get_router(cls, *chain_args) -> APIRouter:
        """Get the router instance."""
        return cls(*chain_args).router
