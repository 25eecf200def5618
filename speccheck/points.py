""" construction of curve points with a controlled order class and encoding

    the torsion subgroup E[8] of edwards25519 is cyclic, variant i below always refers to [i]P8 for the fixed
    generator P8, so variant 0 is the identity, 4 is the point of order 2, 2 and 6 are of order 4, the others of order 8
"""

from speccheck.data import CurvePoint, OrderClass
from speccheck.ed25519 import Point, BYTE_ORDER, FIELD_MODULUS, GROUP_ORDER, POINT_SIZE
from speccheck.errors import ConstructionError

# generator of the 8-torsion subgroup
P8 = Point.from_bytes(bytes.fromhex("c7176a703d4dd84fba3c0b760d10670f2a2053fa2c39ccc64ec7fd7792ac037a"))

EIGHT_TORSION = [P8 * i for i in range(8)]

assert not EIGHT_TORSION[4].is_identity() and (EIGHT_TORSION[4] + EIGHT_TORSION[4]).is_identity()


def classify(point: Point) -> OrderClass:
    if point.is_small_order():
        return OrderClass.SMALL
    if point.is_torsion_free():
        return OrderClass.FULL
    return OrderClass.MIXED


def _canonical(point: Point, expected: OrderClass) -> CurvePoint:
    order_class = classify(point)
    if order_class != expected:
        raise ConstructionError(f"constructed point is of class {order_class.value}, {expected.value} was requested")
    return CurvePoint(point=point, encoding=bytes(point), order_class=order_class, canonical=True)


def _check_variant(variant: int):
    if not isinstance(variant, int) or not 0 <= variant < 8:
        raise ConstructionError(f"torsion variant must be in [0, 8), got {variant!r}")


def _check_multiple(base_multiple) -> int:
    m = int(base_multiple)
    if m % GROUP_ORDER == 0:
        raise ConstructionError("base multiple must be non-zero modulo the group order")
    return m


def small_order_point(variant: int, allow_identity: bool = False) -> CurvePoint:
    _check_variant(variant)
    if variant == 0 and not allow_identity:
        raise ConstructionError("the identity is only available if explicitly requested")
    return _canonical(EIGHT_TORSION[variant], OrderClass.SMALL)


def mixed_order_point(base_multiple, torsion_variant: int) -> CurvePoint:
    """ [base_multiple]B + [torsion_variant]P8 """
    _check_variant(torsion_variant)
    if torsion_variant == 0:
        raise ConstructionError("a mixed order point needs a non-zero torsion component")
    m = _check_multiple(base_multiple)
    return _canonical(Point.base_times(m) + EIGHT_TORSION[torsion_variant], OrderClass.MIXED)


def full_order_point(base_multiple) -> CurvePoint:
    m = _check_multiple(base_multiple)
    return _canonical(Point.base_times(m), OrderClass.FULL)


def non_canonical_encoding(point: CurvePoint) -> CurvePoint:
    """ re-encode point using y + p as field representative, the sign bit of x is kept

        a decoder reducing mod p recovers the same point, a decoder rejecting field elements >= p must reject it,
        only points with y < 19 have such an encoding
    """
    y = point.point.y
    unreduced = y + FIELD_MODULUS
    if unreduced >= 2 ** 255:
        raise ConstructionError(f"y = {y} has no non-canonical representative below 2^255")
    encoded = unreduced | (point.point.sign << 255)
    return CurvePoint(
        point=point.point,
        encoding=encoded.to_bytes(POINT_SIZE, BYTE_ORDER),
        order_class=point.order_class,
        canonical=False,
    )


def negate(point: CurvePoint) -> CurvePoint:
    return _canonical(-point.point, point.order_class)
