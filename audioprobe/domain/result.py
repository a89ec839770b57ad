"""
Result container for per-file outcomes.

Resolution steps return Result values instead of raising, so a batch can
carry successes and typed failures side by side:

    def resolve(path: Path) -> Result[AudioRecord, ProbeFailure]:
        if not path.exists():
            return Result.Err(ProbeFailure(path=path, kind=FailureKind.NOT_FOUND))
        return Result.Ok(record)
"""
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar, cast

T = TypeVar("T")
E = TypeVar("E")

@dataclass(frozen=True)
class Result(Generic[T, E]):
    ok: bool
    value: Optional[T] = None
    failure: Optional[E] = None

    @staticmethod
    def Ok(value: T) -> "Result[T, E]":
        """Create a successful result."""
        return Result(ok=True, value=value)

    @staticmethod
    def Err(failure: E) -> "Result[T, E]":
        """Create a failed result carrying the failure value."""
        return Result(ok=False, failure=failure)

    def unwrap(self) -> T:
        """Get the value or raise ValueError carrying the failure."""
        if self.ok:
            return cast(T, self.value)
        raise ValueError(str(self.failure))


# One entry per submitted target, completion order.
BatchOutcome = List[Result]
