"""Command table for the decimal engine.

Each command maps to exactly one engine operation and has a fixed argument
count (the command name itself is not counted). Command names are
case-insensitive and may carry the ``BN.`` module prefix, so ``bn.incrby``
and ``INCRBY`` are the same command.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from bignum.engine import ONE, DecimalEngine, get_engine
from bignum.errors import ArityError, UnknownCommand
from bignum.numeric import codec
from bignum.numeric.operators import Operation
from bignum.services import KeyRef

COMMAND_PREFIX = "BN."


@dataclass(frozen=True)
class CommandSpec:
    """A registered command."""
    name: str
    handler: Callable[..., Optional[str]]
    min_args: int
    max_args: int
    readonly: bool = False


class CommandDispatcher:
    """Validate arity and route commands to the engine."""

    def __init__(self, engine: DecimalEngine) -> None:
        self.engine = engine
        self._commands: Dict[str, CommandSpec] = {}
        self._register_defaults()

    @property
    def commands(self) -> Mapping[str, CommandSpec]:
        return dict(self._commands)

    def register(
        self,
        name: str,
        handler: Callable[..., Optional[str]],
        min_args: int,
        max_args: Optional[int] = None,
        readonly: bool = False,
    ) -> None:
        name = name.upper()
        self._commands[name] = CommandSpec(
            name=name,
            handler=handler,
            min_args=min_args,
            max_args=min_args if max_args is None else max_args,
            readonly=readonly,
        )

    def lookup(self, command: str) -> CommandSpec:
        name = command.upper()
        if name.startswith(COMMAND_PREFIX):
            name = name[len(COMMAND_PREFIX):]
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommand(command) from None

    def execute(self, command: str, *args) -> Optional[str]:
        """Run ``command`` with ``args``.

        Returns:
            The formatted result, or ``None`` when a GET/HGET target is absent.

        Raises:
            UnknownCommand: No such command.
            ArityError: Wrong number of arguments.
            BignumError: Any error raised by the engine.
        """
        spec = self.lookup(command)
        if not spec.min_args <= len(args) <= spec.max_args:
            raise ArityError(spec.name)
        return spec.handler(*args)

    def _register_defaults(self) -> None:
        self.register("GET", self._get, 1, 2, readonly=True)
        self.register("INCR", self._incr, 1)
        self.register("DECR", self._decr, 1)
        self.register("INCRBY", self._incrby, 2)
        self.register("DECRBY", self._decrby, 2)
        self.register("HGET", self._hget, 2, 3, readonly=True)
        self.register("HINCR", self._hincr, 2)
        self.register("HDECR", self._hdecr, 2)
        self.register("HINCRBY", self._hincrby, 3)
        self.register("HDECRBY", self._hdecrby, 3)
        for op in Operation:
            self.register(op.name, self._binary(op), 2, readonly=True)
        self.register("TO_FIXED", self._to_fixed, 2, readonly=True)

    # ── flat keys ────────────────────────────────────────────────────────────

    def _get(self, key, digits=0):
        return self.engine.get(KeyRef.flat(key), codec.parse_digits(digits))

    def _incr(self, key):
        return self.engine.increment(KeyRef.flat(key), ONE, 1)

    def _decr(self, key):
        return self.engine.increment(KeyRef.flat(key), ONE, -1)

    def _incrby(self, key, delta):
        return self.engine.increment_by(KeyRef.flat(key), delta, 1)

    def _decrby(self, key, delta):
        return self.engine.increment_by(KeyRef.flat(key), delta, -1)

    # ── hash fields ──────────────────────────────────────────────────────────

    def _hget(self, container, field, digits=0):
        return self.engine.get(KeyRef.in_hash(container, field), codec.parse_digits(digits))

    def _hincr(self, container, field):
        return self.engine.increment(KeyRef.in_hash(container, field), ONE, 1)

    def _hdecr(self, container, field):
        return self.engine.increment(KeyRef.in_hash(container, field), ONE, -1)

    def _hincrby(self, container, field, delta):
        return self.engine.increment_by(KeyRef.in_hash(container, field), delta, 1)

    def _hdecrby(self, container, field, delta):
        return self.engine.increment_by(KeyRef.in_hash(container, field), delta, -1)

    # ── no store ─────────────────────────────────────────────────────────────

    def _binary(self, op: Operation) -> Callable[..., str]:
        def handler(lhs, rhs):
            return self.engine.apply(op, lhs, rhs)
        return handler

    def _to_fixed(self, value, digits):
        return self.engine.fixed_point(value, codec.parse_digits(digits))


# Singleton instance
_dispatcher: Optional[CommandDispatcher] = None


def get_dispatcher() -> CommandDispatcher:
    """Get or create the dispatcher bound to the engine singleton."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = CommandDispatcher(get_engine())
    return _dispatcher
