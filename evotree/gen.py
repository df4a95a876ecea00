"""
evotree/gen.py - Depth-bounded random tree generation (TreeGen)
"""
import logging
import random
from enum import Enum
from typing import Any, Optional, Sequence, Union

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

RandomSource = Union[random.Random, int, None]


class TreeGenMode(Enum):
    """Depth policy in use. See the TreeGen constructors."""
    PERFECT = 'perfect'
    FULL = 'full'
    FULL_RANGED = 'full_ranged'


def make_rng(rng: RandomSource) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    if rng is None or isinstance(rng, int):
        return random.Random(rng)
    raise TypeError(f"Expected random.Random, int seed or None, got {type(rng).__name__}")


class TreeGen:
    """Configures the depth and shape of generated GP trees.

    A TreeGen is also the random source handed to the Node generation hooks,
    so leaf and branch generators draw from it directly
    (``tree_gen.choice(...)``, ``tree_gen.randint(...)``).

    The depth chosen by ``perfect`` and ``full_ranged`` is fixed when the
    TreeGen is built; create a new one for each independent tree when
    depths should vary between trees.
    """

    def __init__(self, rng: RandomSource, mode: TreeGenMode, min_depth: int,
                 max_depth: int, chosen_depth: Optional[int] = None):
        self._check_bounds(min_depth, max_depth)
        if mode is not TreeGenMode.FULL:
            if chosen_depth is None or not min_depth <= chosen_depth <= max_depth:
                raise ConfigurationError(
                    f"{mode.value} mode needs a chosen depth in "
                    f"[{min_depth}, {max_depth}], got {chosen_depth}"
                )
        self.rng = make_rng(rng)
        self._mode = mode
        self._min_depth = min_depth
        self._max_depth = max_depth
        self._chosen_depth = chosen_depth if mode is not TreeGenMode.FULL else None
        logger.debug("TreeGen %s depth=[%d, %d] chosen=%s",
                     mode.value, min_depth, max_depth, self._chosen_depth)

    @staticmethod
    def _check_bounds(min_depth: int, max_depth: int) -> None:
        if min_depth < 0 or max_depth < 0:
            raise ConfigurationError(
                f"Tree depths must be non-negative, got min_depth={min_depth}, max_depth={max_depth}"
            )
        if min_depth > max_depth:
            raise ConfigurationError(
                f"min_depth ({min_depth}) must not exceed max_depth ({max_depth})"
            )

    @classmethod
    def _choose_depth(cls, rng: random.Random, min_depth: int, max_depth: int) -> int:
        cls._check_bounds(min_depth, max_depth)
        return rng.randint(min_depth, max_depth)

    @classmethod
    def perfect(cls, rng: RandomSource, min_depth: int, max_depth: int) -> 'TreeGen':
        """Generate perfect trees: every leaf sits at one depth chosen in [min_depth, max_depth].

        Equivalent to DEAP's ``genFull``.
        """
        rng = make_rng(rng)
        chosen = cls._choose_depth(rng, min_depth, max_depth)
        return cls(rng, TreeGenMode.PERFECT, min_depth, max_depth, chosen)

    @classmethod
    def full(cls, rng: RandomSource, min_depth: int, max_depth: int) -> 'TreeGen':
        """Generate trees whose leaf depths are linearly distributed over [min_depth, max_depth].

        Not the same as DEAP's ``genFull``; see ``perfect``.
        """
        return cls(rng, TreeGenMode.FULL, min_depth, max_depth)

    @classmethod
    def full_ranged(cls, rng: RandomSource, min_depth: int, max_depth: int) -> 'TreeGen':
        """Like ``full`` but against a depth chosen once in [min_depth, max_depth].

        Equivalent to DEAP's ``genGrow``.
        """
        rng = make_rng(rng)
        chosen = cls._choose_depth(rng, min_depth, max_depth)
        return cls(rng, TreeGenMode.FULL_RANGED, min_depth, max_depth, chosen)

    @classmethod
    def half_and_half(cls, rng: RandomSource, min_depth: int, max_depth: int) -> 'TreeGen':
        """Pick ``perfect`` or ``full_ranged`` on a fair coin.

        Equivalent to DEAP's ``genHalfAndHalf``. The choice holds for the
        lifetime of the returned TreeGen.
        """
        rng = make_rng(rng)
        if rng.random() < 0.5:
            return cls.perfect(rng, min_depth, max_depth)
        return cls.full_ranged(rng, min_depth, max_depth)

    @classmethod
    def from_mode(cls, mode: str, rng: RandomSource, min_depth: int, max_depth: int) -> 'TreeGen':
        """Build a TreeGen from a mode name"""
        constructors = {
            'perfect': cls.perfect,
            'full': cls.full,
            'full_ranged': cls.full_ranged,
            'half_and_half': cls.half_and_half,
        }
        if mode not in constructors:
            raise ConfigurationError(
                f"Unknown tree generation mode: {mode!r} (expected one of {', '.join(constructors)})"
            )
        return constructors[mode](rng, min_depth, max_depth)

    @property
    def mode(self) -> TreeGenMode:
        return self._mode

    @property
    def min_depth(self) -> int:
        return self._min_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def chosen_depth(self) -> Optional[int]:
        return self._chosen_depth

    def have_reached_a_leaf(self, current_depth: int) -> bool:
        """Decide whether the node at ``current_depth`` should be a leaf"""
        if self._mode is TreeGenMode.PERFECT:
            return current_depth >= self._chosen_depth

        if self._mode is TreeGenMode.FULL:
            limit = self._max_depth
        else:
            limit = self._chosen_depth

        # Equal 1-in-interval chance at every depth between min_depth and the
        # limit; the limit itself always gets a leaf.
        if current_depth >= limit:
            return True
        return current_depth >= self._min_depth and self.weighted_bool(limit - self._min_depth)

    def weighted_bool(self, n: int) -> bool:
        """Return True with probability 1/n. Always True when n <= 1."""
        return n <= 1 or self.rng.randrange(n) == 0

    # Random source passthrough for the generation hooks

    def random(self) -> float:
        return self.rng.random()

    def coin(self) -> bool:
        return self.rng.random() < 0.5

    def randrange(self, start: int, stop: Optional[int] = None) -> int:
        if stop is None:
            start, stop = 0, start
        if start >= stop:
            raise ConfigurationError(f"Cannot pick uniformly from empty range [{start}, {stop})")
        return self.rng.randrange(start, stop)

    def randint(self, a: int, b: int) -> int:
        if a > b:
            raise ConfigurationError(f"Cannot pick uniformly from empty range [{a}, {b}]")
        return self.rng.randint(a, b)

    def uniform(self, a: float, b: float) -> float:
        return self.rng.uniform(a, b)

    def choice(self, seq: Sequence[Any]) -> Any:
        if not seq:
            raise ConfigurationError("Cannot choose from an empty sequence")
        return self.rng.choice(seq)

    def __repr__(self):
        return (f"TreeGen(mode={self._mode.value}, min_depth={self._min_depth}, "
                f"max_depth={self._max_depth}, chosen_depth={self._chosen_depth})")
