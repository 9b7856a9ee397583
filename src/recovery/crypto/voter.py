import asyncio
import logging
from concurrent.futures import Executor, ProcessPoolExecutor
from functools import reduce
from typing import Optional

from recovery.common.constants import LOG_FORMAT
from recovery.common.errors import (
    DegenerateCombinationError,
    InconsistentCombinationError,
    NoConsistentSecretError,
)
from recovery.common.types import (
    ReconstructionResult,
    ReconstructionSettings,
    ShareSet,
    TieBreak,
)
from recovery.crypto.combinations import Combinations
from recovery.crypto.lagrange import interpolate_at_zero

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)


class Candidate:
    def __init__(self, first_seen: int):
        self.frequency = 0
        self.first_seen = first_seen
        self.id_sets: list[frozenset[int]] = []


class VoteTally:
    """
    Candidate secrets with the number of combinations that produced each of them.

    Tallies built over disjoint parts of the enumeration can be merged in any order and give the
    same result as a single tally built over the whole of it.
    """

    def __init__(self):
        self._candidates: dict[int, Candidate] = {}
        self.combinations = 0
        self.skipped = 0

    def __len__(self) -> int:
        return len(self._candidates)

    def __contains__(self, secret: int) -> bool:
        return secret in self._candidates

    def frequency(self, secret: int) -> int:
        return self._candidates[secret].frequency

    def record(self, secret: int, share_ids: frozenset[int], ordinal: int):
        self.combinations += 1
        candidate = self._candidates.get(secret)
        if candidate is None:
            candidate = self._candidates[secret] = Candidate(first_seen=ordinal)
        candidate.frequency += 1
        candidate.first_seen = min(candidate.first_seen, ordinal)
        candidate.id_sets.append(share_ids)

    def skip(self):
        self.combinations += 1
        self.skipped += 1

    def merge(self, other: "VoteTally") -> "VoteTally":
        merged = VoteTally()
        merged.combinations = self.combinations + other.combinations
        merged.skipped = self.skipped + other.skipped
        for tally in (self, other):
            for secret, candidate in tally._candidates.items():
                target = merged._candidates.get(secret)
                if target is None:
                    target = merged._candidates[secret] = Candidate(candidate.first_seen)
                target.frequency += candidate.frequency
                target.first_seen = min(target.first_seen, candidate.first_seen)
                target.id_sets.extend(candidate.id_sets)
        return merged

    def winner(self, tie_break: TieBreak = TieBreak.FIRST_SEEN) -> int:
        """
        Returns the secret produced by the most combinations.

        Ties on frequency go to the secret seen earliest in enumeration order, or to the smallest
        secret with ``TieBreak.SMALLEST``.

        Raises:
            NoConsistentSecretError: If no combination produced a secret.
        """
        if not self._candidates:
            raise NoConsistentSecretError(self.combinations, self.skipped)

        def rank(item: tuple[int, Candidate]):
            secret, candidate = item
            if tie_break is TieBreak.SMALLEST:
                return -candidate.frequency, secret
            return -candidate.frequency, candidate.first_seen

        secret, _ = min(self._candidates.items(), key=rank)
        return secret

    def valid_ids(self, secret: int) -> set[int]:
        valid: set[int] = set()
        for share_ids in self._candidates[secret].id_sets:
            valid |= share_ids
        return valid


def tally_combinations(
    share_set: ShareSet, exact: bool = True, offset: int = 0, stride: int = 1
) -> VoteTally:
    """
    Interpolates every k-combination of the first n shares whose ordinal is ``offset`` modulo
    ``stride`` and tallies the resulting secrets.

    Degenerate and inconsistent combinations are skipped.
    """
    logger = logging.getLogger(VoteTally.__name__)
    tally = VoteTally()
    shares = share_set.shares
    for ordinal, indices in enumerate(Combinations(share_set.n, share_set.k)):
        if ordinal % stride != offset:
            continue
        points = [shares[i].as_point() for i in indices]
        try:
            secret = interpolate_at_zero(points, exact=exact)
        except (DegenerateCombinationError, InconsistentCombinationError) as e:
            logger.debug(f"Skipping combination {ordinal}: {e}")
            tally.skip()
            continue
        tally.record(secret, frozenset(x for x, _ in points), ordinal)
    return tally


class ConsistencyVoter:
    def __init__(
        self, share_set: ShareSet, settings: Optional[ReconstructionSettings] = None
    ):
        self._logger = logging.getLogger(__class__.__name__)
        self._share_set = share_set
        self._settings = settings or ReconstructionSettings()

    def reconstruct(self) -> ReconstructionResult:
        """
        Recovers the secret by majority vote over every k-combination of shares.

        Returns:
            ReconstructionResult: The winning secret and the ids of the shares that never took
                part in a combination voting for it.

        Raises:
            NoConsistentSecretError: If every combination was skipped.
        """
        self._logger.info(
            f"Voting over combinations of n={self._share_set.n}, k={self._share_set.k}"
        )
        tally = tally_combinations(self._share_set, exact=self._settings.exact)
        return self._resolve(tally)

    async def reconstruct_async(
        self, executor: Optional[Executor] = None
    ) -> ReconstructionResult:
        """
        Same as ``reconstruct`` but splits the combinations across ``settings.workers`` jobs.

        Args:
            executor (Optional[Executor]): Where the jobs run. A process pool sized to the number
                of workers is created and shut down when omitted.
        """
        workers = self._settings.workers
        self._logger.info(
            f"Voting over combinations of n={self._share_set.n}, k={self._share_set.k} "
            f"with {workers} workers"
        )
        loop = asyncio.get_running_loop()
        owned = executor is None
        if owned:
            executor = ProcessPoolExecutor(max_workers=workers)
        try:
            partials = await asyncio.gather(
                *(
                    loop.run_in_executor(
                        executor,
                        tally_combinations,
                        self._share_set,
                        self._settings.exact,
                        offset,
                        workers,
                    )
                    for offset in range(workers)
                )
            )
        finally:
            if owned:
                executor.shutdown()
        return self._resolve(reduce(VoteTally.merge, partials, VoteTally()))

    def _resolve(self, tally: VoteTally) -> ReconstructionResult:
        try:
            secret = tally.winner(self._settings.tie_break)
        except NoConsistentSecretError:
            self._logger.error(
                f"All {tally.combinations} combinations were skipped, no secret to elect"
            )
            raise
        valid_ids = tally.valid_ids(secret)
        corrupted_ids = [i for i in self._share_set.ids if i not in valid_ids]
        self._logger.info(
            f"Secret elected by {tally.frequency(secret)} of {tally.combinations} combinations "
            f"({tally.skipped} skipped), corrupted shares: {corrupted_ids}"
        )
        return ReconstructionResult(
            secret=secret,
            corrupted_ids=corrupted_ids,
            frequency=tally.frequency(secret),
            combinations=tally.combinations,
            skipped=tally.skipped,
        )
