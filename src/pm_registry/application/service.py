"""RegistryApplicationService: serialises creation requests against the single registry.

One instance per application, built at startup and handed to the routers
through ``app.state``. Creation runs under the registry lock; lookups are
plain reads.
"""

import asyncio
import logging

from config.settings import Settings
from src.pm_clearing.infrastructure.ledger import ValueLedger
from src.pm_common.address import derive_factory_address
from src.pm_common.enums import LedgerEntryType, PayoutMode
from src.pm_common.errors import AppError, MarketNotFoundError
from src.pm_market.domain.models import MarketParams
from src.pm_registry.application.schemas import (
    CreateMarketRequest,
    CreateMarketResponse,
    FactoryResponse,
    MarketAddressResponse,
)
from src.pm_registry.domain.registry import MarketRegistry

logger = logging.getLogger(__name__)


class RegistryApplicationService:
    def __init__(self, registry: MarketRegistry, ledger: ValueLedger | None = None) -> None:
        self.registry = registry
        self.ledger = ledger if ledger is not None else ValueLedger()
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls, settings: Settings, ledger: ValueLedger | None = None
    ) -> "RegistryApplicationService":
        registry = MarketRegistry(
            address=derive_factory_address(settings.FACTORY_SALT),
            min_liquidity=settings.MIN_LIQUIDITY_NANO,
            payout_mode=PayoutMode(settings.PAYOUT_MODE),
            max_holders=settings.MAX_HOLDERS_PER_MARKET,
            balance=settings.FACTORY_DEPLOY_VALUE_NANO,
        )
        return cls(registry, ledger)

    async def create_market(self, request: CreateMarketRequest) -> CreateMarketResponse:
        params = MarketParams(
            question=request.question,
            clarification=request.clarification,
            close_timestamp=request.close_timestamp,
            oracle_addr=request.oracle_addr,
            fee_bps=request.fee_bps,
            initial_value=request.initial_value,
            initial_probability=request.initial_probability,
        )
        async with self._lock:
            try:
                created = self.registry.create_market(
                    request.sender, params, attached_value=request.attached_value
                )
            except AppError as exc:
                logger.warning(
                    "CreateMarket rejected: sender=%s code=%d %s",
                    request.sender, exc.code, exc.message,
                )
                raise
            for transfer in created.transfers:
                entry_type = (
                    LedgerEntryType.MARKET_DEPOSIT
                    if transfer.recipient == created.address
                    else LedgerEntryType.FACTORY_DEPOSIT
                )
                self.ledger.record(transfer, entry_type, created.address)
            next_id = self.registry.get_next_market_id()

        return CreateMarketResponse(
            market_id=created.market_id,
            address=created.address,
            next_market_id=next_id,
        )

    def get_next_market_id(self) -> int:
        return self.registry.get_next_market_id()

    def get_market_address(self, market_id: int) -> MarketAddressResponse:
        address = self.registry.get_market_address(market_id)
        if address is None:
            raise MarketNotFoundError(market_id)
        return MarketAddressResponse(market_id=market_id, address=address)

    def get_factory(self) -> FactoryResponse:
        registry = self.registry
        return FactoryResponse(
            address=registry.address,
            next_market_id=registry.get_next_market_id(),
            balance=registry.get_factory_balance(),
            min_liquidity=registry.min_liquidity,
            payout_mode=registry.payout_mode.value,
            max_holders=registry.max_holders,
        )
