"""Property-based tests for the decimal engine.

Uses Hypothesis to verify:
    1. test_round_trip              – parse(format(v)) == v for ≤34-digit values
    2. test_rescale_idempotent      – rescale(rescale(v, n), n) == rescale(v, n)
    3. test_absence_as_zero         – incrementing an absent key == incrementing "0"
    4. test_sum_never_wider_than_precision – sums keep ≤34 digits, truncated toward zero
"""
from decimal import Context, Decimal

import fakeredis
from hypothesis import HealthCheck, given, settings as h_settings
from hypothesis import strategies as st

from bignum.engine import DecimalEngine
from bignum.errors import NumericOverflow
from bignum.numeric import codec
from bignum.services import KeyRef, RedisStore

# ── Hypothesis configuration ──────────────────────────────────────────────────
h_settings.register_profile(
    "ci",
    max_examples=300,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
h_settings.load_profile("ci")


# ── Strategy helpers ──────────────────────────────────────────────────────────

_coefficient = st.integers(min_value=-(10**34 - 1), max_value=10**34 - 1)
_exponent = st.integers(min_value=-60, max_value=60)


@st.composite
def decimals(draw):
    """Finite decimals with at most 34 significant digits."""
    return Decimal(f"{draw(_coefficient)}E{draw(_exponent)}")


_digits = st.integers(min_value=-40, max_value=40)

# Wide enough to hold any sum of two drawn values exactly.
_EXACT = Context(prec=200)


# ── Codec properties ──────────────────────────────────────────────────────────

class TestCodecProperties:
    """Property-based tests for parse/format/rescale."""

    @given(value=decimals())
    def test_round_trip(self, value):
        """Formatting then parsing returns the same value and representation."""
        parsed = codec.parse(codec.format(value), 0)
        assert parsed == value
        assert parsed.as_tuple() == value.as_tuple()

    @given(value=decimals(), digits=_digits)
    def test_rescale_idempotent(self, value, digits):
        """Rescaling twice to the same digit count changes nothing."""
        try:
            once = codec.rescale(value, digits)
        except NumericOverflow:
            return
        twice = codec.rescale(once, digits)
        assert twice == once
        assert twice.as_tuple() == once.as_tuple()
        assert once.as_tuple().exponent == -digits

    @given(value=decimals(), digits=_digits)
    def test_rescale_truncates_toward_zero(self, value, digits):
        """Rescaling never moves a value away from zero."""
        try:
            rescaled = codec.rescale(value, digits)
        except NumericOverflow:
            return
        assert abs(rescaled) <= abs(value)


# ── Engine properties ─────────────────────────────────────────────────────────

class TestEngineProperties:
    """Property-based tests for the read-modify-write engine."""

    @given(delta=decimals(), sign=st.sampled_from([1, -1]))
    @h_settings(max_examples=100)
    def test_absence_as_zero(self, delta, sign):
        """Incrementing an absent key matches incrementing a key holding "0"."""
        server = fakeredis.FakeRedis(decode_responses=True)
        server.set("zero", "0")
        engine = DecimalEngine(RedisStore(client=server))

        from_absent = engine.increment(KeyRef.flat("absent"), delta, sign)
        from_zero = engine.increment(KeyRef.flat("zero"), delta, sign)
        assert from_absent == from_zero

    @given(lhs=decimals(), rhs=decimals())
    def test_sum_never_wider_than_precision(self, lhs, rhs):
        """Results keep ≤34 digits and never exceed the exact sum in magnitude."""
        result = codec.parse(DecimalEngine.apply("add", codec.format(lhs), codec.format(rhs)))
        assert len(result.as_tuple().digits) <= 34
        exact = _EXACT.add(lhs, rhs)
        assert abs(result) <= abs(exact)
        if exact >= 0:
            assert result >= 0
        else:
            assert result <= 0
