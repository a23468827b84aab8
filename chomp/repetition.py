from typing import Optional, Tuple, Union

class Repetition:
    """
    Inclusive bounds on how many times a parser must and may match.

    `maximum` is None when there is no upper bound.
    """
    def __init__(self, minimum: int = 0, maximum: Optional[int] = None, name: str = None) -> None:
        if minimum < 0 or (maximum is not None and maximum < 0):
            raise ValueError(f"Repetition bounds must be non-negative, got ({minimum}, {maximum})")
        if maximum is not None and minimum > maximum:
            raise ValueError(f"Repetition minimum {minimum} exceeds maximum {maximum}")
        self.minimum: int = minimum
        self.maximum: Optional[int] = maximum
        self.name: str = name or f"Between({minimum}, {maximum})"

    def range(self) -> Tuple[int, Optional[int]]:
        return self.minimum, self.maximum

    def reached(self, count: int) -> bool:
        """True once `count` matches leave no room for another."""
        return self.maximum is not None and count >= self.maximum

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Repetition):
            return NotImplemented
        return self.range() == other.range()

    def __hash__(self) -> int:
        return hash(self.range())

    def __repr__(self) -> str:
        return self.name

    @classmethod
    def coerce(cls, rep: Union['Repetition', int]) -> 'Repetition':
        """
        Accepts a Repetition, or a bare integer meaning exactly that many times.
        """
        if isinstance(rep, Repetition):
            return rep
        if isinstance(rep, int) and not isinstance(rep, bool):
            return exactly(rep)
        raise TypeError(f"Expected a Repetition or an int, got {type(rep).__name__}")


NEVER = Repetition(0, 0, "Never")
ANY = Repetition(0, None, "Any")
MANY = Repetition(1, None, "Many")

def exactly(n: int) -> Repetition:
    return Repetition(n, n, f"Exactly({n})")

def at_least(n: int) -> Repetition:
    return Repetition(n, None, f"AtLeast({n})")

def at_most(n: int) -> Repetition:
    """
    Any number of times up to `n`, including zero.
    """
    return Repetition(0, n, f"AtMost({n})")

def between(minimum: int, maximum: int) -> Repetition:
    return Repetition(minimum, maximum, f"Between({minimum}, {maximum})")
