"""Tests for pm_common.errors and pm_common.response."""

import pytest

from src.pm_common.errors import (
    AlreadyResolvedError,
    AppError,
    DivisionByZeroError,
    HolderLimitExceededError,
    InsufficientLiquidityError,
    InsufficientSharesError,
    InternalError,
    InvalidAmountError,
    InvalidFeeError,
    InvalidProbabilityError,
    MarketClosedError,
    MarketNotFoundError,
    NothingToClaimError,
    NotResolvedError,
    UnauthorizedError,
)
from src.pm_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_custom_http_status(self) -> None:
        err = AppError(code=3007, message="Resolved", http_status=409)
        assert err.http_status == 409

    def test_is_exception(self) -> None:
        err = AppError(code=4001, message="test")
        assert isinstance(err, Exception)
        assert str(err) == "test"


class TestSpecificErrors:
    @pytest.mark.parametrize(
        ("err", "code", "status"),
        [
            (UnauthorizedError("0:x"), 1001, 403),
            (MarketNotFoundError(7), 3001, 404),
            (InsufficientLiquidityError("empty"), 3003, 422),
            (InvalidProbabilityError(0), 3004, 422),
            (InvalidFeeError(10000), 3005, 422),
            (MarketClosedError(1), 3006, 422),
            (AlreadyResolvedError(1), 3007, 409),
            (NotResolvedError(1), 3008, 422),
            (InvalidAmountError("zero"), 4001, 422),
            (DivisionByZeroError("reserve"), 4002, 422),
            (InsufficientSharesError("YES", 10, 3), 5001, 422),
            (NothingToClaimError("0:x"), 5002, 422),
            (HolderLimitExceededError(5), 5003, 422),
            (InternalError(), 9002, 500),
        ],
    )
    def test_code_and_status(self, err: AppError, code: int, status: int) -> None:
        assert isinstance(err, AppError)
        assert err.code == code
        assert err.http_status == status

    def test_insufficient_shares_message(self) -> None:
        err = InsufficientSharesError("NO", required=6500, available=3000)
        assert "NO" in err.message
        assert "6500" in err.message
        assert "3000" in err.message

    def test_probability_message(self) -> None:
        assert "150" in InvalidProbabilityError(150).message


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"market_id": 0})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"market_id": 0}

    def test_success_keeps_request_id(self) -> None:
        resp = success_response(None, request_id="req_abc")
        assert resp.request_id == "req_abc"

    def test_error(self) -> None:
        resp = error_response(5001, "Insufficient YES shares")
        assert resp.code == 5001
        assert resp.message == "Insufficient YES shares"
        assert resp.data is None
        assert resp.request_id.startswith("req_")

    def test_serialization(self) -> None:
        resp = success_response({"price_yes": 23333})
        d = resp.model_dump()
        assert set(d) == {"code", "message", "data", "timestamp", "request_id"}
        assert isinstance(ApiResponse.model_validate(d), ApiResponse)
