class RecoveryError(Exception):
    """Base class for every error raised by the recovery package."""


class DegenerateCombinationError(RecoveryError):
    """Two shares of one combination have the same id, so no polynomial passes through them."""

    def __init__(self, share_id: int):
        super().__init__(f"Duplicate share id found: {share_id}")
        self.share_id = share_id


class InconsistentCombinationError(RecoveryError):
    """The interpolated constant term is not an integer."""

    def __init__(self, share_ids: tuple[int, ...], numerator: int, denominator: int):
        super().__init__(
            f"Shares {list(share_ids)} interpolate to a fraction with a "
            f"{denominator.bit_length()}-bit denominator, not an integer"
        )
        self.share_ids = share_ids


class InexactDivisionError(RecoveryError, ArithmeticError):
    pass


class NoConsistentSecretError(RecoveryError):
    def __init__(self, combinations: int, skipped: int):
        super().__init__(
            f"No consistent secret found: {combinations} combinations, {skipped} skipped"
        )
        self.combinations = combinations
        self.skipped = skipped


class MalformedInputError(RecoveryError):
    pass
