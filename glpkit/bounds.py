"""
Bounds of rows and columns.

Rows and columns share the same rules, kept here in one place.
"""
import math
from typing import NamedTuple

from .constants import DBL_MAX, BoundsType, VarStatus


class BoundsSpec(NamedTuple):
    """
    Resolved bounds: the type tag and the effective lower and upper bound.

    A missing bound is reported as -DBL_MAX / +DBL_MAX.
    """
    type: BoundsType
    lb: float
    ub: float

    @classmethod
    def resolve(cls, type_, lo: float, hi: float) -> 'BoundsSpec':
        """
        Resolve the effective bounds of a (type, lo, hi) triple.

        Inputs that the type does not use are discarded, so FIXED keeps
        ``lo`` on both sides and ignores ``hi``. No consistency check is
        made; ``lo > hi`` is stored as given.
        """
        type_ = BoundsType(type_)
        lo = float(lo)
        hi = float(hi)
        if type_ == BoundsType.FR:
            return cls(type_, -DBL_MAX, DBL_MAX)
        if type_ == BoundsType.LO:
            return cls(type_, lo, DBL_MAX)
        if type_ == BoundsType.UP:
            return cls(type_, -DBL_MAX, hi)
        if type_ == BoundsType.DB:
            return cls(type_, lo, hi)
        return cls(type_, lo, lo)

    @classmethod
    def free(cls) -> 'BoundsSpec':
        return cls.resolve(BoundsType.FR, 0.0, 0.0)

    @classmethod
    def fixed(cls, value: float) -> 'BoundsSpec':
        return cls.resolve(BoundsType.FX, value, value)


FREE_BOUNDS = BoundsSpec.free()
ZERO_BOUNDS = BoundsSpec.fixed(0.0)


def _is_infinite(value: float) -> bool:
    return math.isinf(value) or abs(value) >= DBL_MAX


def bounds_type_for(lb: float, ub: float) -> BoundsType:
    """Bounds type matching a numeric pair, infinite sides are unbounded"""
    no_lb = _is_infinite(lb) and lb < 0
    no_ub = _is_infinite(ub) and ub > 0
    if no_lb and no_ub:
        return BoundsType.FR
    if no_ub:
        return BoundsType.LO
    if no_lb:
        return BoundsType.UP
    if lb == ub:
        return BoundsType.FX
    return BoundsType.DB


def status_after_bounds(bounds: BoundsSpec, stat: VarStatus) -> VarStatus:
    """Status of a variable once its bounds have been changed to ``bounds``"""
    if stat == VarStatus.BS:
        return stat
    if bounds.type == BoundsType.DB:
        if stat in (VarStatus.NL, VarStatus.NU):
            return stat
        return VarStatus.NL if abs(bounds.lb) <= abs(bounds.ub) else VarStatus.NU
    return _NONBASIC[bounds.type]


def fit_status(bounds: BoundsSpec, stat) -> VarStatus:
    """Non-basic status actually stored when ``stat`` is requested"""
    stat = VarStatus(stat)
    if stat == VarStatus.BS:
        return stat
    if bounds.type == BoundsType.DB:
        return VarStatus.NU if stat == VarStatus.NU else VarStatus.NL
    return _NONBASIC[bounds.type]


_NONBASIC = {
    BoundsType.FR: VarStatus.NF,
    BoundsType.LO: VarStatus.NL,
    BoundsType.UP: VarStatus.NU,
    BoundsType.FX: VarStatus.NS,
}
