"""Registry REST endpoints.

POST /markets: create and deploy a market
GET  /markets/next-id: next market id (= number of markets)
GET  /markets/{market_id}/address: deployed address for an id
GET  /factory: registry identity, counter and balance
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.pm_common.dependencies import get_registry_service, get_request_id
from src.pm_common.response import ApiResponse, success_response
from src.pm_registry.application.schemas import CreateMarketRequest, NextMarketIdResponse
from src.pm_registry.application.service import RegistryApplicationService

router = APIRouter(tags=["registry"])


@router.post("/markets", status_code=201)
async def create_market(
    body: CreateMarketRequest,
    service: Annotated[RegistryApplicationService, Depends(get_registry_service)],
    request_id: Annotated[str | None, Depends(get_request_id)],
) -> ApiResponse:
    result = await service.create_market(body)
    return success_response(result.model_dump(), "Market deployed", request_id)


@router.get("/markets/next-id")
async def get_next_market_id(
    service: Annotated[RegistryApplicationService, Depends(get_registry_service)],
    request_id: Annotated[str | None, Depends(get_request_id)],
) -> ApiResponse:
    result = NextMarketIdResponse(next_market_id=service.get_next_market_id())
    return success_response(result.model_dump(), request_id=request_id)


@router.get("/markets/{market_id}/address")
async def get_market_address(
    market_id: int,
    service: Annotated[RegistryApplicationService, Depends(get_registry_service)],
    request_id: Annotated[str | None, Depends(get_request_id)],
) -> ApiResponse:
    result = service.get_market_address(market_id)
    return success_response(result.model_dump(), request_id=request_id)


@router.get("/factory")
async def get_factory(
    service: Annotated[RegistryApplicationService, Depends(get_registry_service)],
    request_id: Annotated[str | None, Depends(get_request_id)],
) -> ApiResponse:
    return success_response(service.get_factory().model_dump(), request_id=request_id)
