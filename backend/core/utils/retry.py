"""
Bounded-attempt generation of values that must be unique in storage
"""
from typing import Awaitable, Callable, TypeVar

from core.exceptions import CodeGenerationExhaustedException
from core.utils.logging import structured_logger

T = TypeVar("T")


async def generate_unique(
    generate: Callable[[], T],
    exists: Callable[[T], Awaitable[bool]],
    max_attempts: int,
    label: str = "code",
) -> T:
    """Call ``generate`` until ``exists`` reports a free value.

    Raises CodeGenerationExhaustedException after ``max_attempts`` collisions.
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generate()
        if not await exists(candidate):
            return candidate
        structured_logger.warning(
            message=f"Generated {label} collided with an existing value",
            metadata={"label": label, "attempt": attempt, "max_attempts": max_attempts},
        )

    structured_logger.error(
        message=f"Exhausted attempts generating a unique {label}",
        metadata={"label": label, "attempts": max_attempts},
    )
    raise CodeGenerationExhaustedException(
        message=f"Could not generate a unique {label} after {max_attempts} attempts",
        attempts=max_attempts,
    )
