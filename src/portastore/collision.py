"""
Creation-collision resolution.

Decides what happens when a file or folder is created (or renamed) under a name
that may already be taken in the parent folder. The resolver only checks for
existence; the caller carries out the resulting action.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import Awaitable, Callable, Iterator, Optional, Union

from .exceptions import TooManyCollisionsError
from .paths import split_extension

logger = logging.getLogger(__name__)

# exists(parent, name) -> bool
ExistsCheck = Callable[[str, str], Awaitable[bool]]

FIRST_UNIQUE_NUMBER = 2


class CollisionPolicy(str, Enum):
    """Caller's strategy for a name conflict during creation."""
    FAIL_IF_EXISTS = "fail_if_exists"
    REPLACE_EXISTING = "replace_existing"
    OPEN_IF_EXISTS = "open_if_exists"
    GENERATE_UNIQUE_NAME = "generate_unique_name"


class CollisionAction(str, Enum):
    """What the caller must do with the resolved name."""
    CREATE_NEW = "create_new"  # Nothing exists under final_name
    TRUNCATE = "truncate"  # Discard the existing entry's content
    OPEN_EXISTING = "open_existing"  # Keep the existing entry as is
    FAIL = "fail"  # Raise AlreadyExistsError


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a name inside a parent folder."""
    final_name: str
    action: CollisionAction


def unique_name_candidates(name: str, start: int = FIRST_UNIQUE_NUMBER) -> Iterator[str]:
    """
    Yield numbered variants of a name: 'base (2).ext', 'base (3).ext', ...

    Only the final extension is kept after the number, so 'a.b.txt' gives
    'a.b (2).txt' and 'foo' gives 'foo (2)'. The sequence is infinite.
    """
    base, extension = split_extension(name)
    for number in count(start):
        yield f"{base} ({number}){extension}"


class CollisionResolver:
    """
    Resolves a requested entry name against a collision policy.

    The search for a unique name is unbounded unless max_attempts is given, in
    which case TooManyCollisionsError is raised once that many numbered
    candidates have all been found to exist.
    """

    def __init__(self, max_attempts: Optional[int] = None):
        self.max_attempts = max_attempts

    async def resolve(
        self,
        parent: str,
        name: str,
        policy: Union[str, CollisionPolicy],
        exists: ExistsCheck,
    ) -> Resolution:
        """
        Decide the final name and action for creating `name` inside `parent`.

        Args:
            parent: Path of the containing folder
            name: Requested entry name
            policy: Collision policy (enum member or its string value)
            exists: Awaitable existence check taking (parent, name)

        Returns:
            Resolution with the final name and the action to perform

        Raises:
            ValueError: If the policy is unknown
            TooManyCollisionsError: If max_attempts candidates all exist
        """
        policy = CollisionPolicy(policy)

        if not await exists(parent, name):
            return Resolution(name, CollisionAction.CREATE_NEW)

        if policy is CollisionPolicy.FAIL_IF_EXISTS:
            resolution = Resolution(name, CollisionAction.FAIL)
        elif policy is CollisionPolicy.REPLACE_EXISTING:
            resolution = Resolution(name, CollisionAction.TRUNCATE)
        elif policy is CollisionPolicy.OPEN_IF_EXISTS:
            resolution = Resolution(name, CollisionAction.OPEN_EXISTING)
        else:
            resolution = Resolution(
                await self._find_unique_name(parent, name, exists),
                CollisionAction.CREATE_NEW,
            )

        logger.debug(
            f"Collision on '{name}' in {parent} under {policy.value}: "
            f"{resolution.action.value} '{resolution.final_name}'"
        )
        return resolution

    async def _find_unique_name(self, parent: str, name: str, exists: ExistsCheck) -> str:
        """Return the lowest-numbered candidate that does not exist yet."""
        candidates = unique_name_candidates(name)
        attempts = 0
        while True:
            candidate = next(candidates)
            if not await exists(parent, candidate):
                return candidate
            attempts += 1
            if self.max_attempts is not None and attempts >= self.max_attempts:
                raise TooManyCollisionsError(
                    f"No free name for '{name}' after {attempts} numbered candidates",
                    attempts=attempts,
                    path=parent,
                )
