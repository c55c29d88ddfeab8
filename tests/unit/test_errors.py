"""Tests for pm_common.errors and pm_common.response."""

from src.pm_common.errors import (
    AlreadyResolvedError,
    AppError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InsufficientLPError,
    InvalidRatioError,
    LiquidityError,
    MathError,
    MathOverflowError,
    NotMinterError,
    PoolNotFoundError,
    StateError,
    SweepError,
    TransferError,
    ValidationError,
    ZeroInputError,
)
from src.pm_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9004, message="Internal error")
        assert err.code == 9004
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1001, message="test"), Exception)


class TestTaxonomy:
    def test_validation(self) -> None:
        err = ZeroInputError("collateral")
        assert isinstance(err, ValidationError)
        assert err.code == 1001
        assert err.http_status == 422
        assert "collateral" in err.message

    def test_transfer(self) -> None:
        err = InsufficientBalanceError("USDC", 10, 3)
        assert isinstance(err, TransferError)
        assert err.code == 2001
        assert "required 10, available 3" in err.message
        assert InsufficientAllowanceError("SI", 1, 0).code == 2002

    def test_not_minter_is_forbidden(self) -> None:
        err = NotMinterError("SI", "mallory")
        assert err.http_status == 403

    def test_state(self) -> None:
        assert isinstance(AlreadyResolvedError(), StateError)
        assert AlreadyResolvedError().http_status == 409
        err = PoolNotFoundError("42")
        assert err.code == 3001
        assert err.http_status == 404

    def test_liquidity(self) -> None:
        assert isinstance(InsufficientLPError(5, 1), LiquidityError)
        assert InvalidRatioError(1, 2).code == 4003

    def test_math(self) -> None:
        assert isinstance(MathOverflowError(), MathError)
        err = SweepError("NO", 7)
        assert err.http_status == 500
        assert "7 NO" in err.message


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"reserve_si": 1})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"reserve_si": 1}
        assert resp.request_id.startswith("req_")

    def test_error(self) -> None:
        resp = error_response(AlreadyResolvedError())
        assert resp.code == 3002
        assert resp.data is None
        assert "resolved" in resp.message

    def test_model_dump(self) -> None:
        d = ApiResponse().model_dump()
        assert set(d) == {"code", "message", "data", "timestamp", "request_id"}
