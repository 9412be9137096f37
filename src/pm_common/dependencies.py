"""FastAPI dependencies: the per-app service instances live on ``app.state``."""

from fastapi import Request

from src.pm_market.application.service import MarketApplicationService
from src.pm_registry.application.service import RegistryApplicationService


def get_registry_service(request: Request) -> RegistryApplicationService:
    return request.app.state.registry_service


def get_market_service(request: Request) -> MarketApplicationService:
    return request.app.state.market_service


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)
