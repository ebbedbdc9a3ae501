"""Profile editing with snapshot-based undo."""

import logging
from collections import deque
from dataclasses import dataclass, field

from diet_assistant.domain.profiles import UserProfile

_logger = logging.getLogger(__name__)


@dataclass
class ProfileHistory:
    """Bounded LIFO of whole-profile snapshots."""

    max_depth: int = 20
    _snapshots: deque[UserProfile] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._snapshots = deque(maxlen=self.max_depth)

    def checkpoint(self, profile: UserProfile) -> None:
        """Push a snapshot; the oldest one is dropped once the stack is full."""
        # Profiles are frozen, so storing the instance is a full copy.
        self._snapshots.append(profile)

    def undo(self) -> UserProfile | None:
        """Pop the most recent snapshot, or None when there is nothing to undo."""
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def __len__(self) -> int:
        return len(self._snapshots)


@dataclass
class ProfileService:
    """Holds the active profile and checkpoints it before each edit."""

    history: ProfileHistory
    profile: UserProfile | None = None

    def update(self, **changes: object) -> UserProfile | None:
        """Apply field edits to the active profile, checkpointing the old one."""
        if self.profile is None:
            return None
        edited = self.profile.with_changes(**changes)
        self.history.checkpoint(self.profile)
        self.profile = edited
        _logger.debug("Profile updated: %s", ", ".join(sorted(changes)))
        return self.profile

    def set_calculation_method(self, method: str) -> UserProfile | None:
        """Switch the calorie calculation method."""
        return self.update(calculation_method=method)

    def undo(self) -> bool:
        """Install the most recent snapshot as the active profile."""
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self.profile = snapshot
        return True
