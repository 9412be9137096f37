"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Authorization
  3xxx: Market / registry
  4xxx: Numeric input
  5xxx: Holder position
  9xxx: System

Codes are stable: callers branch on the class or on ``code``, never on
``message``.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Authorization ---

class UnauthorizedError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(1001, f"Caller is not the market oracle: {caller}", 403)


# --- 3xxx: Market / registry ---

class MarketNotFoundError(AppError):
    def __init__(self, market_ref: str | int) -> None:
        super().__init__(3001, f"Market not found: {market_ref}", 404)


class InsufficientLiquidityError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3003, f"Insufficient liquidity: {detail}", 422)


class InvalidProbabilityError(AppError):
    def __init__(self, probability: int) -> None:
        super().__init__(
            3004, f"Initial probability must be between 1 and 99, got {probability}", 422
        )


class InvalidFeeError(AppError):
    def __init__(self, fee_bps: int) -> None:
        super().__init__(3005, f"Fee must be between 0 and 9999 bps, got {fee_bps}", 422)


class MarketClosedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3006, f"Market is closed for trading: {market_id}", 422)


class AlreadyResolvedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3007, f"Market already resolved: {market_id}", 409)


class NotResolvedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3008, f"Market is not resolved yet: {market_id}", 422)


# --- 4xxx: Numeric input ---

class InvalidAmountError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4001, f"Invalid amount: {detail}", 422)


class DivisionByZeroError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4002, f"Division by zero: {detail}", 422)


# --- 5xxx: Holder position ---

class InsufficientSharesError(AppError):
    def __init__(self, side: str, required: int, available: int) -> None:
        super().__init__(
            5001,
            f"Insufficient {side} shares: required {required}, available {available}",
            422,
        )


class NothingToClaimError(AppError):
    def __init__(self, holder: str) -> None:
        super().__init__(5002, f"Nothing to claim for {holder}", 422)


class HolderLimitExceededError(AppError):
    def __init__(self, limit: int) -> None:
        super().__init__(5003, f"Market holder limit reached: {limit}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
