"""Custom exception hierarchy."""


class WaiterError(Exception):
    """Base exception for selenium-waiter."""


class WaitTimeoutError(WaiterError):
    """A polled condition did not hold before its deadline.

    The message names the attempted operation, the subject it ran against and
    the timeout, e.g. ``Click could not complete on css selector='#save'
    within 30 seconds``.
    """

    def __init__(
        self, operation: str, target: str, timeout: float, attempts: int = 0
    ):
        self.operation = operation
        self.target = target
        self.timeout = timeout
        self.attempts = attempts
        super().__init__(
            f"{operation} could not complete on {target} within {timeout} seconds"
        )


class ConfigError(WaiterError):
    """Configuration file is missing, unreadable or invalid."""
