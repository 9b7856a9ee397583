from typing import Iterable, Optional

from Crypto.Random import random

from recovery.common.types import ReconstructionResult, ReconstructionSettings, Share, ShareSet
from recovery.crypto.voter import ConsistencyVoter


class SharesManager:
    def __init__(self, total_shares: int, threshold: int, coefficient_bits: int = 64):
        if not 1 <= threshold <= total_shares:
            raise ValueError(f"Invalid {threshold=} for {total_shares=}")
        self.total_shares = total_shares
        self.threshold = threshold
        self.coefficient_bits = coefficient_bits

    def split_secret(self, secret: int) -> list[Share]:
        """
        Splits a secret into shares over the integers using a random polynomial of degree threshold - 1.

        Args:
            secret (int): The secret to split, the constant term of the polynomial.

        Returns:
            list[Share]: One share per id in 1..total_shares.

        Raises:
            ValueError: If the secret is negative.
        """
        if secret < 0:
            raise ValueError("Secret must be non-negative")
        coefficients = [secret] + [
            random.getrandbits(self.coefficient_bits) + 1 for _ in range(self.threshold - 1)
        ]
        return [
            Share(id=x, value=sum(c * x**power for power, c in enumerate(coefficients)))
            for x in range(1, self.total_shares + 1)
        ]

    def combine_shares(
        self, shares: list[Share], settings: Optional[ReconstructionSettings] = None
    ) -> ReconstructionResult:
        """
        Reconstructs the secret from shares that may include corrupted ones.

        Args:
            shares (list[Share]): The shares to combine, at least threshold of them.
            settings (Optional[ReconstructionSettings]): Voting settings.

        Returns:
            ReconstructionResult: The elected secret and the ids of the corrupted shares.

        Raises:
            ValueError: If there are fewer shares than the threshold.
            NoConsistentSecretError: If no combination of shares yields a secret.
        """
        share_set = ShareSet(shares=shares, n=len(shares), k=self.threshold)
        return ConsistencyVoter(share_set, settings).reconstruct()

    @staticmethod
    def corrupt(shares: list[Share], share_ids: Iterable[int]) -> list[Share]:
        """Returns a copy of the shares where the value of every listed id is replaced."""
        share_ids = set(share_ids)
        return [
            Share(id=s.id, value=s.value + random.randint(1, 1 << 16))
            if s.id in share_ids
            else s
            for s in shares
        ]
