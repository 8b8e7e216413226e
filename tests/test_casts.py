"""Tests for the checked cast routines."""

import math

import pytest

from scalar_cast import cast, classify, try_cast
from scalar_cast.backend.float32 import F32_MAX, int_to_f32, is_f32_exact, round_to_f32
from scalar_cast.backend.results import CastError, CastErrorKind, CastResult
from scalar_cast.internals.exceptions import InvalidScalarError
from scalar_cast.semantics.categories import CastCategory
from scalar_cast.semantics.type_predicates import ALL_KINDS, INTEGER_KINDS
from scalar_cast.semantics.typesys import ScalarKind as K

OVERFLOW = CastErrorKind.OVERFLOW
UNDERFLOW = CastErrorKind.UNDERFLOW
NAN = CastErrorKind.NAN
INFINITE = CastErrorKind.INFINITE

INTEGER_TARGETS = sorted(INTEGER_KINDS, key=lambda k: k.value)


# ─────────────────────────────────────────────────────────────────────────────
# Concrete scenarios
# ─────────────────────────────────────────────────────────────────────────────

class TestScenarios:

    def test_negative_i8_to_u8_underflows(self, evaluator):
        assert evaluator.cast(-1, K.I8, K.U8) == CastResult.err(UNDERFLOW)

    def test_256_i16_to_u8_overflows(self, evaluator):
        assert evaluator.cast(256, K.I16, K.U8) == CastResult.err(OVERFLOW)

    def test_127_i8_to_u8_succeeds(self, evaluator):
        result = evaluator.cast(127, K.I8, K.U8)
        assert result == CastResult.ok(127)
        assert result.value == 127

    def test_nan_f32_to_u8(self, evaluator):
        assert evaluator.cast(math.nan, K.F32, K.U8).error is NAN

    def test_infinity_f32_to_u8(self, evaluator):
        assert evaluator.cast(math.inf, K.F32, K.U8).error is INFINITE

    def test_infinity_f64_to_f32_passes_through(self, evaluator):
        result = evaluator.cast(math.inf, K.F64, K.F32)
        assert result.is_ok
        assert result.value == math.inf

    def test_u8_to_u16_is_a_bare_value(self, evaluator):
        result = evaluator.cast(0, K.U8, K.U16)
        assert result == 0
        assert not isinstance(result, CastResult)

    def test_module_level_functions_use_default_catalog(self):
        assert classify(K.USIZE, K.U64) is CastCategory.PROMOTION
        assert try_cast(-1, K.ISIZE, K.USIZE).error is UNDERFLOW
        assert cast(2 ** 40, K.USIZE, K.U64) == 2 ** 40


# ─────────────────────────────────────────────────────────────────────────────
# Integer categories
# ─────────────────────────────────────────────────────────────────────────────

class TestIntegerCasts:

    def test_boundary_exactness(self, evaluator):
        catalog = evaluator.catalog
        for src in INTEGER_TARGETS:
            for dst in INTEGER_TARGETS:
                if evaluator.is_infallible(src, dst):
                    continue
                s = catalog.range_of(src)
                d = catalog.range_of(dst)
                for bound in (d.min, d.max):
                    if bound in s:
                        assert evaluator.try_cast(bound, src, dst) == CastResult.ok(bound), (src, dst)
                if d.min - 1 in s:
                    assert evaluator.try_cast(d.min - 1, src, dst).error is UNDERFLOW, (src, dst)
                if d.max + 1 in s:
                    assert evaluator.try_cast(d.max + 1, src, dst).error is OVERFLOW, (src, dst)

    def test_in_range_narrowing_round_trips(self, evaluator):
        narrowing = (CastCategory.NARROW_FROM_SIGNED, CastCategory.NARROW_FROM_UNSIGNED)
        for src in INTEGER_TARGETS:
            for dst in INTEGER_TARGETS:
                if evaluator.classify(src, dst) not in narrowing:
                    continue
                for value in (0, 1, 100, -100):
                    if not (evaluator.catalog.contains(src, value) and evaluator.catalog.contains(dst, value)):
                        continue
                    narrowed = evaluator.try_cast(value, src, dst).unwrap()
                    assert narrowed == value
                    assert evaluator.try_cast(narrowed, dst, src).unwrap() == value

    def test_promotions_are_exact_for_integers(self, evaluator):
        for src in INTEGER_TARGETS:
            for dst in INTEGER_TARGETS:
                if not evaluator.is_infallible(src, dst):
                    continue
                bounds = evaluator.catalog.range_of(src)
                assert evaluator.cast(bounds.min, src, dst) == bounds.min
                assert evaluator.cast(bounds.max, src, dst) == bounds.max

    def test_half_promotion_only_rejects_negatives(self, evaluator64):
        assert evaluator64.cast(0, K.I64, K.U64) == CastResult.ok(0)
        assert evaluator64.cast(2 ** 63 - 1, K.I64, K.U64) == CastResult.ok(2 ** 63 - 1)
        assert evaluator64.cast(-(2 ** 63), K.I64, K.U64).error is UNDERFLOW

    def test_narrow_from_signed_checks_underflow_first(self, evaluator64):
        assert evaluator64.cast(-129, K.I16, K.I8).error is UNDERFLOW
        assert evaluator64.cast(128, K.I16, K.I8).error is OVERFLOW
        assert evaluator64.cast(-1, K.I64, K.U32).error is UNDERFLOW

    def test_narrow_from_unsigned_has_no_underflow(self, evaluator64):
        assert evaluator64.cast(128, K.U8, K.I8).error is OVERFLOW
        assert evaluator64.cast(2 ** 64 - 1, K.U64, K.I64).error is OVERFLOW
        assert evaluator64.cast(0, K.U64, K.I8) == CastResult.ok(0)

    def test_native_width_changes_outcome(self, evaluator32, evaluator64):
        big = 2 ** 40
        assert evaluator32.cast(big, K.I64, K.USIZE).error is OVERFLOW
        assert evaluator64.cast(big, K.I64, K.USIZE) == CastResult.ok(big)
        # At 64 bits usize -> u64 is a promotion and returns a bare value.
        assert evaluator64.cast(big, K.USIZE, K.U64) == big

    def test_errors_report_the_kinds_as_spelled(self, evaluator32):
        result = evaluator32.try_cast(-1, K.ISIZE, K.USIZE)
        assert result.src is K.ISIZE
        assert result.dst is K.USIZE
        assert result.source == -1


# ─────────────────────────────────────────────────────────────────────────────
# Float categories
# ─────────────────────────────────────────────────────────────────────────────

class TestFloatCasts:

    @pytest.mark.parametrize("src", [K.F32, K.F64])
    def test_special_values_to_every_integer_kind(self, evaluator, src):
        for dst in INTEGER_TARGETS:
            assert evaluator.try_cast(math.nan, src, dst).error is NAN
            assert evaluator.try_cast(math.inf, src, dst).error is INFINITE
            assert evaluator.try_cast(-math.inf, src, dst).error is INFINITE

    def test_special_values_survive_float_narrowing(self, evaluator):
        assert math.isnan(evaluator.try_cast(math.nan, K.F64, K.F32).unwrap())
        assert evaluator.try_cast(-math.inf, K.F64, K.F32).unwrap() == -math.inf

    def test_from_float_truncates_toward_zero(self, evaluator64):
        assert evaluator64.cast(3.99, K.F64, K.U8) == CastResult.ok(3)
        assert evaluator64.cast(-3.99, K.F64, K.I8) == CastResult.ok(-3)
        assert evaluator64.cast(-0.9, K.F64, K.I8) == CastResult.ok(0)

    def test_from_float_compares_the_unrounded_value(self, evaluator64):
        assert evaluator64.cast(-0.5, K.F64, K.U8).error is UNDERFLOW
        assert evaluator64.cast(255.5, K.F32, K.U8).error is OVERFLOW
        assert evaluator64.cast(255.0, K.F32, K.U8) == CastResult.ok(255)
        assert evaluator64.cast(-128.0, K.F64, K.I8) == CastResult.ok(-128)

    def test_from_float_64_bit_bounds(self, evaluator64):
        assert evaluator64.cast(2.0 ** 63, K.F64, K.I64).error is OVERFLOW
        assert evaluator64.cast(-(2.0 ** 63), K.F64, K.I64) == CastResult.ok(-(2 ** 63))
        assert evaluator64.cast(2.0 ** 64, K.F64, K.U64).error is OVERFLOW
        largest_below = 2.0 ** 64 - 2048.0
        assert evaluator64.cast(largest_below, K.F64, K.U64) == CastResult.ok(2 ** 64 - 2048)

    def test_float_narrow_range(self, evaluator):
        assert evaluator.cast(F32_MAX, K.F64, K.F32) == CastResult.ok(F32_MAX)
        assert evaluator.cast(1e39, K.F64, K.F32).error is OVERFLOW
        assert evaluator.cast(-1e39, K.F64, K.F32).error is UNDERFLOW

    def test_float_narrow_rounds_to_nearest(self, evaluator):
        result = evaluator.cast(0.1, K.F64, K.F32).unwrap()
        assert result == round_to_f32(0.1)
        assert result != 0.1
        assert is_f32_exact(result)
        assert evaluator.cast(1e-50, K.F64, K.F32) == CastResult.ok(0.0)

    def test_f32_to_f64_is_exact(self, evaluator):
        value = round_to_f32(0.1)
        assert evaluator.cast(value, K.F32, K.F64) == value

    def test_integer_to_float_rounds(self, evaluator64):
        assert evaluator64.cast(2 ** 63 - 1, K.I64, K.F64) == 2.0 ** 63
        assert evaluator64.cast(2 ** 24 + 1, K.U32, K.F32) == 2.0 ** 24
        assert evaluator64.cast(2 ** 24 + 3, K.U32, K.F32) == 2.0 ** 24 + 4
        assert evaluator64.cast(2 ** 64 - 1, K.USIZE, K.F32) == 2.0 ** 64


class TestFloat32Helpers:

    def test_int_to_f32_rounds_once(self):
        n = 2 ** 60 + 2 ** 36 + 1
        # float(n) would first round to 2**60 + 2**36, a binary32 tie.
        assert int_to_f32(n) == 2.0 ** 60 + 2.0 ** 37
        assert int_to_f32(-n) == -(2.0 ** 60 + 2.0 ** 37)

    def test_int_to_f32_small_values_are_exact(self):
        assert int_to_f32(-(2 ** 24)) == -16777216.0
        assert int_to_f32(12345) == 12345.0

    def test_round_to_f32_overflow(self):
        assert round_to_f32(F32_MAX) == F32_MAX
        with pytest.raises(OverflowError):
            round_to_f32(1e39)


# ─────────────────────────────────────────────────────────────────────────────
# Totality and invalid input
# ─────────────────────────────────────────────────────────────────────────────

class TestTotality:

    SAMPLES = {
        "int": [0, 1, -1, 127, 255, 2 ** 31, -(2 ** 63), 2 ** 64 - 1],
        "float": [0.0, -0.0, 0.5, -1.5, 1e10, -1e300, math.nan, math.inf, -math.inf],
    }

    def test_every_pair_returns_one_outcome(self, evaluator):
        catalog = evaluator.catalog
        for src in ALL_KINDS:
            samples = self.SAMPLES["float" if src.is_float else "int"]
            for value in samples:
                if not catalog.contains(src, value):
                    continue
                for dst in ALL_KINDS:
                    result = evaluator.try_cast(value, src, dst)
                    assert result.is_ok != result.is_err
                    if result.is_ok and dst.is_integer:
                        assert catalog.contains(dst, result.unwrap())


class TestInvalidInput:

    @pytest.mark.parametrize("value,kind", [
        (300, K.U8),
        (-1, K.U16),
        (1.5, K.I32),
        (True, K.I8),
        (1, K.F64),
        (0.1, K.F32),
    ])
    def test_invalid_source_values_raise(self, evaluator64, value, kind):
        with pytest.raises(InvalidScalarError):
            evaluator64.try_cast(value, kind, K.F64)

    def test_native_range_checked_at_the_configured_width(self, evaluator32):
        with pytest.raises(InvalidScalarError):
            evaluator32.try_cast(2 ** 32, K.USIZE, K.U64)

    def test_invalid_scalar_error_is_a_value_error(self, evaluator64):
        with pytest.raises(ValueError, match="not a valid u8"):
            evaluator64.cast(256, K.U8, K.I8)


class TestCastResult:

    def test_ok_accessors(self):
        result = CastResult.ok(5, K.I32, K.U8)
        assert result.is_ok and not result.is_err
        assert result.unwrap() == 5
        assert result.unwrap_or(0) == 5
        assert result.ok_value() == 5
        assert result.map(lambda v: v * 2) == CastResult.ok(10)
        assert repr(result) == "Ok(5)"

    def test_err_accessors(self):
        result = CastResult.err(OVERFLOW, 256, K.I16, K.U8)
        assert result.is_err
        assert result.unwrap_or(0) == 0
        assert result.ok_value() is None
        assert result.map(lambda v: v * 2) is result
        assert repr(result) == "Err(OVERFLOW)"

    def test_unwrap_raises_cast_error(self):
        result = CastResult.err(UNDERFLOW, -1, K.I8, K.U8)
        with pytest.raises(CastError) as exc_info:
            result.unwrap()
        error = exc_info.value
        assert error.kind is UNDERFLOW
        assert error.value == -1
        assert "underflow: cannot cast -1 from i8 to u8" in str(error)
        with pytest.raises(ArithmeticError):
            result.value

    def test_equality(self):
        assert CastResult.ok(math.nan) == CastResult.ok(math.nan)
        assert CastResult.err(NAN, 1.0) == CastResult.err(NAN, 2.0)
        assert CastResult.ok(1) != CastResult.ok(2)
        assert CastResult.ok(0) != CastResult.err(OVERFLOW)
        assert len({CastResult.ok(1), CastResult.ok(1)}) == 1
        assert len({CastResult.ok(math.nan), CastResult.ok(float("nan"))}) == 1
        assert hash(CastResult.ok(math.nan)) == hash(CastResult.ok(float("nan")))

    def test_error_codes(self):
        assert [k.code for k in CastErrorKind] == ["CE2001", "CE2002", "CE2003", "CE2004"]
