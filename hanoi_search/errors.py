"""Exception types raised by the Hanoi search package."""


class HanoiSearchError(Exception):
    """Base class for every error raised by hanoi_search."""


class InvalidProblemError(HanoiSearchError, ValueError):
    """Rejected search input (disk count, goal peg or strategy)."""


class InvalidConfigurationError(HanoiSearchError, ValueError):
    """A peg arrangement that breaks the Hanoi invariants."""


class IllegalMoveError(HanoiSearchError, ValueError):
    """A move was applied to a configuration where it is not legal."""


class InternalSearchError(HanoiSearchError, RuntimeError):
    """Search bookkeeping broke an invariant; fatal to the run that hit it."""


class SearchExhaustedError(InternalSearchError):
    """
    The frontier emptied before a goal was reached.

    Every valid Hanoi instance is solvable, so this always points at a defect
    in move generation, duplicate detection or the goal test.
    """
