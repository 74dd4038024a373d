"""Slot engine exceptions"""


class ErrorCodes:
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_LINE_INDEX = "INVALID_LINE_INDEX"
    INVALID_BET = "INVALID_BET"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    SPIN_IN_PROGRESS = "SPIN_IN_PROGRESS"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UNKNOWN_SYMBOL = "UNKNOWN_SYMBOL"


class SlotEngineException(Exception):
    def __init__(self, error_code, status_message, status_code, details=None):
        super().__init__(status_message)
        self.error_code = error_code
        self.status_message = status_message
        self.status_code = status_code
        self.details = details if details is not None else {}

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "error": self.status_message,
            "details": self.details
        }


class InvalidInputError(SlotEngineException):
    """Caller contract violation, raised before any state is mutated"""

    def __init__(self, status_message="Invalid input", details=None,
                 error_code=ErrorCodes.INVALID_INPUT, status_code=422):
        super().__init__(
            error_code=error_code,
            status_message=status_message,
            status_code=status_code,
            details=details
        )


class InvalidLineIndexError(InvalidInputError):
    def __init__(self, status_message="Invalid pay-line index", details=None):
        super().__init__(status_message, details, error_code=ErrorCodes.INVALID_LINE_INDEX)


class InvalidBetError(InvalidInputError):
    def __init__(self, status_message="Invalid bet amount", details=None):
        super().__init__(status_message, details, error_code=ErrorCodes.INVALID_BET)


class InsufficientFundsError(InvalidInputError):
    def __init__(self, status_message="Insufficient funds", details=None):
        super().__init__(
            status_message, details,
            error_code=ErrorCodes.INSUFFICIENT_FUNDS,
            status_code=400
        )


class SpinInProgressError(InvalidInputError):
    def __init__(self, status_message="A spin is already in progress", details=None):
        super().__init__(
            status_message, details,
            error_code=ErrorCodes.SPIN_IN_PROGRESS,
            status_code=409
        )


class ConfigurationError(SlotEngineException):
    """The engine cannot produce a draw with the configuration it was given"""

    def __init__(self, status_message="Inconsistent engine configuration", details=None,
                 error_code=ErrorCodes.CONFIGURATION_ERROR):
        super().__init__(
            error_code=error_code,
            status_message=status_message,
            status_code=500,
            details=details
        )


class UnknownSymbolError(ConfigurationError):
    def __init__(self, symbol, details=None):
        super().__init__(
            f"No configuration for symbol {symbol!r}",
            details,
            error_code=ErrorCodes.UNKNOWN_SYMBOL
        )
        self.symbol = symbol
