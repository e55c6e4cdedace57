"""
Two-phase native call protocol.

Several LAPACK families size their workspace with a zero-work query before
the real call. NativeCall wraps one routine for one scalar type and exposes
both phases:

    call = NativeCall(trait, 'sym_eigen')
    lwork, = call.workspace(n, lower=0)        # phase 1: size query
    w, v = call(a, compute_v=1, lwork=lwork)   # phase 2: real call

Phase 2 translates INFO and raises on failure, returning only the routine's
outputs. Workspaces are allocated fresh per call by the routine wrapper and
never retained.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pylinxal.core.errors import check_info
from pylinxal.core.scalar import ROUTINE_FAMILIES, ScalarTrait, Workspace


def _as_size(value: Any, trait: ScalarTrait) -> int:
    """
    Convert a reported workspace size to an int.

    Sizes come back as floating (or complex) numbers. In single precision
    large sizes are not exactly representable, so round up one ulp first.
    """
    size = float(np.real(np.ravel(np.asarray(value))[0]))
    if trait.real_dtype == np.float32:
        size = float(np.nextafter(np.float32(size), np.float32(np.inf)))
    return max(1, int(np.ceil(size)))


class NativeCall:
    """
    One LAPACK routine bound to a scalar trait.

    Attributes:
        trait: Scalar trait selecting the precision
        operation: Logical operation name
        name: Concrete routine name (e.g. 'zheev')
    """

    def __init__(self, trait: ScalarTrait, operation: str):
        self.trait = trait
        self.operation = operation
        self.family = ROUTINE_FAMILIES[operation]
        self.name = trait.routine_name(operation)

    def __repr__(self) -> str:
        return f"NativeCall({self.name!r})"

    def workspace(self, *args: Any, **kwargs: Any) -> tuple[int, ...]:
        """
        Phase 1: query workspace sizes.

        For QUERY families the '<routine>_lwork' companion is called with the
        problem dimensions; it returns one or more sizes followed by INFO.
        For SELF families the routine itself is called with lwork=-1 on the
        actual arguments and the optimal size is read from WORK(1).

        Returns:
            Tuple of sizes, in the order the query reports them

        Raises:
            NativeError: If the query reports a nonzero INFO
        """
        protocol = self.family.workspace

        if protocol is Workspace.QUERY:
            out = self.trait.routine(self.operation, workspace=True)(*args, **kwargs)
            *sizes, info = out
            check_info(info, self.family.errors, self.name + '_lwork')
            return tuple(_as_size(s, self.trait) for s in sizes)

        if protocol is Workspace.SELF:
            out = self.trait.routine(self.operation)(*args, lwork=-1, **kwargs)
            # (..., work, info): WORK(1) holds the optimal size
            work, info = out[-2], out[-1]
            check_info(info, self.family.errors, self.name)
            return (_as_size(work, self.trait),)

        return ()

    def __call__(self, *args: Any, **kwargs: Any) -> tuple[Any, ...]:
        """
        Phase 2: run the routine and translate its status.

        Returns:
            The routine's outputs without the trailing INFO

        Raises:
            NativeError: Subclass matching the routine family and INFO
        """
        outputs, info = self.unchecked(*args, **kwargs)
        check_info(info, self.family.errors, self.name)
        return outputs

    def unchecked(self, *args: Any, **kwargs: Any) -> tuple[tuple[Any, ...], int]:
        """
        Phase 2 without raising: (outputs, INFO).

        For callers that need the routine's outputs to describe a failure,
        such as the pivots of a singular LU factorization.
        """
        *outputs, info = self.trait.routine(self.operation)(*args, **kwargs)
        return tuple(outputs), int(info)
