"""MarketRegistry: the factory that deploys markets and maps ids to addresses.

Ids are dense and start at 0. A market is recorded only after it has been
constructed successfully, so a rejected creation leaves ``next_market_id``
and ``markets`` untouched.
"""

import logging
from dataclasses import dataclass

from src.pm_clearing.domain.models import Transfer
from src.pm_common.address import derive_market_address
from src.pm_common.enums import PayoutMode
from src.pm_common.errors import InvalidAmountError, MarketNotFoundError
from src.pm_market.domain.market import BinaryMarket
from src.pm_market.domain.models import MarketParams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedMarket:
    """Outcome of a successful creation: the new market plus the funding moves."""

    market: BinaryMarket
    transfers: list[Transfer]
    surplus: int

    @property
    def market_id(self) -> int:
        return self.market.market_id

    @property
    def address(self) -> str:
        return self.market.address


class MarketRegistry:
    def __init__(
        self,
        address: str,
        min_liquidity: int,
        payout_mode: PayoutMode = PayoutMode.SYNC,
        max_holders: int = 0,
        balance: int = 0,
    ) -> None:
        self.address = address
        self.min_liquidity = min_liquidity
        self.payout_mode = payout_mode
        self.max_holders = max_holders
        self.balance = balance
        self.next_market_id = 0
        self.markets: dict[int, str] = {}
        self.instances: dict[str, BinaryMarket] = {}

    def create_market(
        self,
        sender: str,
        params: MarketParams,
        attached_value: int | None = None,
    ) -> CreatedMarket:
        """Deploy market ``next_market_id`` seeded with ``params.initial_value``.

        ``attached_value`` is what the sender sent along (defaults to exactly
        the initial value); the surplus stays with the registry.
        """
        attached = params.initial_value if attached_value is None else attached_value
        if attached < params.initial_value:
            raise InvalidAmountError(
                f"attached value {attached} below initial value {params.initial_value}"
            )

        market_id = self.next_market_id
        address = derive_market_address(
            self.address,
            market_id,
            params.question,
            params.clarification,
            params.close_timestamp,
            params.oracle_addr,
            params.fee_bps,
        )
        # Raises on invalid parameters before anything is recorded
        market = BinaryMarket(
            market_id=market_id,
            address=address,
            factory=self.address,
            params=params,
            min_liquidity=self.min_liquidity,
            payout_mode=self.payout_mode,
            max_holders=self.max_holders,
        )

        surplus = attached - params.initial_value
        self.markets[market_id] = address
        self.instances[address] = market
        self.next_market_id = market_id + 1
        self.balance += surplus

        transfers = [Transfer(sender=sender, recipient=address, amount=params.initial_value)]
        if surplus:
            transfers.append(Transfer(sender=sender, recipient=self.address, amount=surplus))
        logger.info(
            "Market %d deployed at %s by %s (initial=%d, surplus=%d)",
            market_id, address, sender, params.initial_value, surplus,
        )
        return CreatedMarket(market, transfers, surplus)

    def get_market_address(self, market_id: int) -> str | None:
        if not (0 <= market_id < self.next_market_id):
            return None
        return self.markets[market_id]

    def get_next_market_id(self) -> int:
        return self.next_market_id

    def get_factory_balance(self) -> int:
        return self.balance

    def get_market(self, address: str) -> BinaryMarket:
        market = self.instances.get(address)
        if market is None:
            raise MarketNotFoundError(address)
        return market

    def get_market_by_id(self, market_id: int) -> BinaryMarket:
        address = self.get_market_address(market_id)
        if address is None:
            raise MarketNotFoundError(market_id)
        return self.instances[address]

    def __len__(self) -> int:
        return self.next_market_id
