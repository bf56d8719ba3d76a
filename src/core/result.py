"""Result types for railway-oriented programming.

Every authentication operation can fail for expected reasons (wrong password,
locked account, revoked session). Those outcomes are returned as values
instead of raised, so callers branch on them explicitly and tests can assert
on them without exception harnesses.

Usage:
    result = await verifier.handle(command)
    match result:
        case Success(value=AuthSucceeded() as tokens):
            ...
        case Success(value=TwoFactorChallenge(user_id=user_id)):
            ...
        case Failure(error=error):
            log.warning("login_failed", code=error.code.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
