from typing import Sequence

from recovery.common.errors import (
    DegenerateCombinationError,
    InconsistentCombinationError,
    InexactDivisionError,
)
from recovery.crypto.rational import ZERO, Rational


def interpolate_at_zero(points: Sequence[tuple[int, int]], exact: bool = True) -> int:
    """
    Evaluates at x = 0 the unique polynomial of degree < k passing through k points.

    Every Lagrange basis term y_j * prod_{m != j} (-x_m) / (x_j - x_m) is accumulated as an exact
    Rational, so no precision is lost before the final reduction to an integer.

    Args:
        points (Sequence[tuple[int, int]]): The (x, y) points, x being the share id.
        exact (bool): Reject points that do not interpolate to an integer. When False the final
            division truncates toward zero.

    Returns:
        int: The constant term of the interpolating polynomial.

    Raises:
        DegenerateCombinationError: If two points share the same x.
        InconsistentCombinationError: If ``exact`` is set and the constant term is not an integer.
    """
    total = ZERO
    for j, (xj, yj) in enumerate(points):
        term = Rational(yj)
        for m, (xm, _) in enumerate(points):
            if m == j:
                continue
            if xj == xm:
                raise DegenerateCombinationError(xj)
            term = term * Rational(-xm, xj - xm)
        total = total + term

    try:
        return total.to_integer(exact=exact)
    except InexactDivisionError:
        raise InconsistentCombinationError(
            tuple(x for x, _ in points), total.numerator, total.denominator
        )
