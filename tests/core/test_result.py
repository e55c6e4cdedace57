"""
Tests for the Result[P] envelope.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - has_warning() and native_called
    - Timer section accounting
"""

from dataclasses import FrozenInstanceError, dataclass

import numpy as np
import pytest

from pylinxal import sym_eigen
from pylinxal.core.result import Result, EMPTY_BACKEND
from pylinxal.core.timing import Timer


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def make_result(**kwargs):
    defaults = dict(
        params=FakeParams(value=1.0),
        info={"routine": "dgesv"},
        timing={"total_seconds": 0.01},
        backend_name="dgesv",
    )
    defaults.update(kwargs)
    return Result(**defaults)


# ═══════════════════════════════════════════════════════════════════════
# Construction and field access
# ═══════════════════════════════════════════════════════════════════════


class TestResultConstruction:

    def test_basic_creation(self):
        result = make_result()
        assert result.params.value == 1.0
        assert result.info["routine"] == "dgesv"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "dgesv"

    def test_warnings_default_empty(self):
        assert make_result().warnings == ()

    def test_timing_optional(self):
        assert make_result(timing=None).timing is None

    def test_frozen(self):
        result = make_result()
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "zgesv"


class TestResultHelpers:

    def test_has_warning_substring(self):
        result = make_result(warnings=("matrix is rank deficient",))
        assert result.has_warning("rank deficient")
        assert not result.has_warning("singular")

    def test_native_called(self):
        assert make_result().native_called

    def test_empty_backend_not_native(self):
        assert not make_result(backend_name=EMPTY_BACKEND, timing=None).native_called


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section('compute'):
            pass
        with timer.section('compute'):
            pass
        timer.stop()
        timing = timer.result()
        assert set(timing) == {'total_seconds', 'compute'}
        assert timing['compute'] >= 0.0

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_operation_timing_breakdown(self):
        timing = sym_eigen(np.eye(3)).result.timing
        assert 'compute' in timing
        assert timing['total_seconds'] >= 0.0
