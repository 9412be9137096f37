"""pm_market REST endpoints.

GET  /markets/{market_id}: market state snapshot
GET  /markets/{market_id}/price: YES/NO prices in bps
GET  /markets/{market_id}/balances/{holder}: holder's YES/NO shares
POST /markets/{market_id}/buy: BuyYes / BuyNo
POST /markets/{market_id}/sell: SellYes / SellNo
POST /markets/{market_id}/resolve: oracle resolution
POST /markets/{market_id}/claim: holder withdrawal (CLAIM mode)
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.pm_common.dependencies import get_market_service, get_request_id
from src.pm_common.enums import Side
from src.pm_common.response import ApiResponse, success_response
from src.pm_market.application.schemas import ClaimRequest, ResolveRequest, TradeRequest
from src.pm_market.application.service import MarketApplicationService

router = APIRouter(prefix="/markets", tags=["markets"])

MarketService = Annotated[MarketApplicationService, Depends(get_market_service)]
RequestId = Annotated[str | None, Depends(get_request_id)]


@router.get("/{market_id}")
async def get_market_state(
    market_id: int, service: MarketService, request_id: RequestId
) -> ApiResponse:
    result = service.get_market_state(market_id)
    return success_response(result.model_dump(), request_id=request_id)


@router.get("/{market_id}/price")
async def get_price(market_id: int, service: MarketService, request_id: RequestId) -> ApiResponse:
    result = service.get_price(market_id)
    return success_response(result.model_dump(), request_id=request_id)


@router.get("/{market_id}/balances/{holder}")
async def get_user_balances(
    market_id: int, holder: str, service: MarketService, request_id: RequestId
) -> ApiResponse:
    result = service.get_user_balances(market_id, holder)
    return success_response(result.model_dump(), request_id=request_id)


@router.post("/{market_id}/buy")
async def buy(
    market_id: int, body: TradeRequest, service: MarketService, request_id: RequestId
) -> ApiResponse:
    result = await service.buy(market_id, Side(body.side), body.sender, body.amount)
    return success_response(result.model_dump(), "Shares bought", request_id)


@router.post("/{market_id}/sell")
async def sell(
    market_id: int, body: TradeRequest, service: MarketService, request_id: RequestId
) -> ApiResponse:
    result = await service.sell(market_id, Side(body.side), body.sender, body.amount)
    return success_response(result.model_dump(), "Shares sold", request_id)


@router.post("/{market_id}/resolve")
async def resolve(
    market_id: int, body: ResolveRequest, service: MarketService, request_id: RequestId
) -> ApiResponse:
    result = await service.resolve(market_id, body.sender, body.outcome)
    return success_response(result.model_dump(), "Market resolved", request_id)


@router.post("/{market_id}/claim")
async def claim(
    market_id: int, body: ClaimRequest, service: MarketService, request_id: RequestId
) -> ApiResponse:
    result = await service.claim(market_id, body.sender)
    return success_response(result.model_dump(), "Payout claimed", request_id)
