"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import Settings, settings
from src.pm_clearing.infrastructure.ledger import ValueLedger
from src.pm_common.datetime_utils import Clock, epoch_now
from src.pm_common.errors import AppError
from src.pm_common.response import error_response
from src.pm_gateway.middleware.request_log import RequestLogMiddleware
from src.pm_market.api.router import router as market_router
from src.pm_market.application.service import MarketApplicationService
from src.pm_registry.api.router import router as registry_router
from src.pm_registry.application.service import RegistryApplicationService

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app(app_settings: Settings | None = None, clock: Clock = epoch_now) -> FastAPI:
    """Build an app with its own registry, ledger and services.

    The registry is process-wide state for this app instance only; tests
    build a fresh app per case.
    """
    cfg = app_settings or settings
    app = FastAPI(title=cfg.APP_NAME, version=VERSION, debug=cfg.DEBUG)

    ledger = ValueLedger()
    registry_service = RegistryApplicationService.from_settings(cfg, ledger)
    app.state.settings = cfg
    app.state.ledger = ledger
    app.state.registry_service = registry_service
    app.state.market_service = MarketApplicationService(
        registry_service.registry, ledger, clock=clock
    )

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        resp = error_response(exc.code, exc.message, getattr(request.state, "request_id", None))
        return JSONResponse(
            status_code=exc.http_status,
            content=resp.model_dump(),
        )

    # Registry routes first: /markets/next-id must win over /markets/{market_id}
    app.include_router(registry_router, prefix="/api/v1")
    app.include_router(market_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": VERSION}

    logger.info(
        "App ready: factory=%s payout_mode=%s min_liquidity=%d",
        registry_service.registry.address, cfg.PAYOUT_MODE, cfg.MIN_LIQUIDITY_NANO,
    )
    return app


app = create_app()
