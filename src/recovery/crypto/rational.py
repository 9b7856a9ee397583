from math import gcd

from recovery.common.errors import InexactDivisionError


class Rational:
    """
    An exact fraction of two arbitrary-precision integers.

    Instances are always stored in lowest terms with a strictly positive denominator and are never
    modified after construction; every arithmetic operation returns a new instance.
    """

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: int, denominator: int = 1):
        if denominator == 0:
            raise ZeroDivisionError("Zero denominator in Rational")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        divisor = gcd(numerator, denominator)
        self._numerator = numerator // divisor
        self._denominator = denominator // divisor

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def add(self, other: "Rational") -> "Rational":
        return Rational(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def multiply(self, other: "Rational") -> "Rational":
        return Rational(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def to_integer(self, exact: bool = True) -> int:
        """
        Reduce the fraction to an integer.

        Args:
            exact (bool): Require the fraction to be a whole number. When False the quotient is
                truncated toward zero instead.

        Returns:
            int: The integer value of the fraction.

        Raises:
            InexactDivisionError: If ``exact`` is set and the denominator is not 1.
        """
        if self._denominator == 1:
            return self._numerator
        if exact:
            raise InexactDivisionError(
                f"Fraction of {self._numerator.bit_length()}-bit numerator and "
                f"{self._denominator.bit_length()}-bit denominator is not an integer"
            )
        quotient = abs(self._numerator) // self._denominator
        return quotient if self._numerator >= 0 else -quotient

    def __add__(self, other: "Rational") -> "Rational":
        if not isinstance(other, Rational):
            return NotImplemented
        return self.add(other)

    def __mul__(self, other: "Rational") -> "Rational":
        if not isinstance(other, Rational):
            return NotImplemented
        return self.multiply(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int):
            return self._denominator == 1 and self._numerator == other
        if not isinstance(other, Rational):
            return NotImplemented
        return (self._numerator, self._denominator) == (other._numerator, other._denominator)

    def __hash__(self) -> int:
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"


ZERO = Rational(0)
