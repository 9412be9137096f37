"""Pydantic schemas for the registry API.

Range checks on probability and fee are left to the domain so that the
caller receives the market error codes (3004, 3005) rather than a generic
validation failure.
"""

from pydantic import BaseModel, Field, field_validator


class CreateMarketRequest(BaseModel):
    sender: str = Field(min_length=1)
    question: str
    clarification: str = ""
    close_timestamp: int = Field(ge=0, description="Epoch seconds; trading stops at this time")
    oracle_addr: str = Field(min_length=1)
    fee_bps: int
    initial_value: int = Field(ge=0, description="Seed liquidity in nano")
    initial_probability: int = Field(description="Initial YES probability, 1-99 percent")
    attached_value: int | None = Field(
        default=None, ge=0, description="Value sent with the request; defaults to initial_value"
    )

    @field_validator("sender", "oracle_addr")
    @classmethod
    def no_whitespace(cls, v: str) -> str:
        if v != v.strip() or " " in v:
            raise ValueError("address must not contain whitespace")
        return v


class CreateMarketResponse(BaseModel):
    market_id: int
    address: str
    next_market_id: int


class MarketAddressResponse(BaseModel):
    market_id: int
    address: str


class NextMarketIdResponse(BaseModel):
    next_market_id: int


class FactoryResponse(BaseModel):
    address: str
    next_market_id: int
    balance: int
    min_liquidity: int
    payout_mode: str
    max_holders: int
