"""Error taxonomy for decimal commands.

Every failure carries a stable ``code`` so callers can branch on the kind of
error instead of parsing messages. ``reply`` renders the error the way a
Redis-compatible front end reports it.
"""


class BignumError(Exception):
    """Base error for decimal engine operations."""

    code = "error"
    prefix = "ERR"
    default_message = "decimal operation failed"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = str(self.args[0])

    @property
    def reply(self) -> str:
        return f"{self.prefix} {self.message}"


class ArityError(BignumError):
    """Wrong number of arguments for a command."""

    code = "arity"

    def __init__(self, command: str) -> None:
        super().__init__(f"wrong number of arguments for '{command.lower()}' command")
        self.command = command


class UnknownCommand(BignumError):
    """Command name is not registered."""

    code = "unknown_command"

    def __init__(self, command: str) -> None:
        super().__init__(f"unknown command '{command}'")
        self.command = command


class ConversionError(BignumError):
    """Text is not a valid decimal literal."""

    code = "wrong_type"
    prefix = "WRONGTYPE"
    default_message = "Operation against a key holding the wrong kind of value"


class InvalidDigits(ConversionError):
    """Fractional-digit argument is not an integer."""

    prefix = "ERR"
    default_message = "invalid precision parameters"


class DivisionByZero(BignumError):
    """Right-hand operand of a division is exactly zero."""

    code = "division_by_zero"
    default_message = "division by zero"


class NumericOverflow(BignumError):
    """Result does not fit in the numeric context."""

    code = "overflow"
    default_message = "numeric overflow"


class StoreError(BignumError):
    """Error reported by the backing store.

    The store's own message is kept verbatim and returned as the reply.
    """

    code = "store"

    @property
    def reply(self) -> str:
        return self.message


class ContextNotInitialized(BignumError):
    """An operation ran before the numeric context was installed."""

    code = "not_initialized"
    default_message = "numeric context is not initialized"
