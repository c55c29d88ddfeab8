"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Validation (bad amount, scale, risk)
  2xxx: Transfer (balance / allowance on any asset movement)
  3xxx: State (pool lifecycle, resolution)
  4xxx: Liquidity (reserves, shares, ratio)
  9xxx: Arithmetic / System
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


class ValidationError(AppError):
    pass


class TransferError(AppError):
    pass


class StateError(AppError):
    pass


class LiquidityError(AppError):
    pass


class MathError(AppError):
    pass


# --- 1xxx: Validation ---

class ZeroInputError(ValidationError):
    def __init__(self, field: str = "amount") -> None:
        super().__init__(1001, f"{field} must be greater than zero", 422)


class InvalidAmountError(ValidationError):
    def __init__(self, amount: int) -> None:
        super().__init__(1002, f"Invalid amount: {amount}", 422)


class InvalidScaleError(ValidationError):
    def __init__(self, scale: int) -> None:
        super().__init__(1003, f"Scale must be within [0, 1e18], got {scale}", 422)


class InvalidRiskError(ValidationError):
    def __init__(self, risk_percent: int) -> None:
        super().__init__(1004, f"Risk percent must be within [0, 100), got {risk_percent}", 422)


class InvalidPoolSpecError(ValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(1005, f"Invalid pool definition: {detail}", 422)


# --- 2xxx: Transfer ---

class InsufficientBalanceError(TransferError):
    def __init__(self, symbol: str, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient {symbol} balance: required {required}, available {available}",
            422,
        )


class InsufficientAllowanceError(TransferError):
    def __init__(self, symbol: str, required: int, available: int) -> None:
        super().__init__(
            2002,
            f"Insufficient {symbol} allowance: required {required}, approved {available}",
            422,
        )


class NotMinterError(TransferError):
    def __init__(self, symbol: str, caller: str) -> None:
        super().__init__(2003, f"{caller} is not allowed to mint or burn {symbol}", 403)


# --- 3xxx: State ---

class PoolNotFoundError(StateError):
    def __init__(self, pool_id: str) -> None:
        super().__init__(3001, f"Pool not found: {pool_id}", 404)


class AlreadyResolvedError(StateError):
    def __init__(self) -> None:
        super().__init__(3002, "Vault is already resolved", 409)


class NotResolvedError(StateError):
    def __init__(self) -> None:
        super().__init__(3003, "Vault is not resolved yet", 409)


class AlreadyInitializedError(StateError):
    def __init__(self) -> None:
        super().__init__(3004, "Pool is already initialized", 409)


# --- 4xxx: Liquidity ---

class InsufficientReserveError(LiquidityError):
    def __init__(self) -> None:
        super().__init__(4001, "Insufficient reserves", 422)


class InsufficientLPError(LiquidityError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            4002,
            f"Insufficient liquidity shares: required {required}, available {available}",
            422,
        )


class InvalidRatioError(LiquidityError):
    def __init__(self, amount_si: int, amount_no: int) -> None:
        super().__init__(
            4003,
            f"Deposit {amount_si} SI / {amount_no} NO does not match the reserve ratio",
            422,
        )


class InsufficientOutputError(LiquidityError):
    def __init__(self, detail: str) -> None:
        super().__init__(4004, f"Insufficient output: {detail}", 422)


class InsufficientLiquidityMintedError(LiquidityError):
    def __init__(self, liquidity: int) -> None:
        super().__init__(
            4005,
            f"Deposit would mint only {liquidity} liquidity shares",
            422,
        )


# --- 9xxx: Arithmetic / System ---

class MathOverflowError(MathError):
    def __init__(self) -> None:
        super().__init__(9001, "Fixed-point overflow", 422)


class DivisionByZeroError(MathError):
    def __init__(self, detail: str = "division by zero") -> None:
        super().__init__(9002, f"Fixed-point {detail}", 422)


class SweepError(MathError):
    def __init__(self, symbol: str, residual: int) -> None:
        super().__init__(9003, f"Router kept {residual} {symbol} after sweep", 500)
