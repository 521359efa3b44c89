"""Key repeat timing.

A held key fires once when pressed, once more after an initial delay and
then at a fixed interval. Each axis keeps its own timer so holding an arrow
key does not speed up a held backspace.
"""

from dataclasses import dataclass, field

from .constants import EditorConstants


@dataclass(frozen=True)
class RepeatPolicy:
    initial_delay: float
    interval: float


HORIZONTAL_POLICY = RepeatPolicy(EditorConstants.HORIZONTAL_REPEAT_DELAY,
                                 EditorConstants.HORIZONTAL_REPEAT_INTERVAL)
VERTICAL_POLICY = RepeatPolicy(EditorConstants.VERTICAL_REPEAT_DELAY,
                               EditorConstants.VERTICAL_REPEAT_INTERVAL)
DELETE_POLICY = RepeatPolicy(EditorConstants.DELETE_REPEAT_DELAY,
                             EditorConstants.DELETE_REPEAT_INTERVAL)


@dataclass
class RepeatTimer:
    policy: RepeatPolicy
    next_fire: float = 0.0

    def should_fire(self, pressed: bool, held: bool, now: float) -> bool:
        """Decide whether a key on this axis acts at time now.

        Args:
            pressed: The key went down during this step
            held: The key is still down from an earlier step
            now: Monotonic time in seconds

        Returns:
            True if the action should run
        """
        if pressed:
            self.next_fire = now + self.policy.initial_delay
            return True
        if held and now > self.next_fire:
            self.next_fire = now + self.policy.interval
            return True
        return False


@dataclass
class RepeatTimers:
    """Per-axis timers owned by an editing session."""
    horizontal: RepeatTimer = field(default_factory=lambda: RepeatTimer(HORIZONTAL_POLICY))
    vertical: RepeatTimer = field(default_factory=lambda: RepeatTimer(VERTICAL_POLICY))
    delete: RepeatTimer = field(default_factory=lambda: RepeatTimer(DELETE_POLICY))

    def for_key(self, key: str):
        """Timer that gates the given key name, or None for non-repeating keys."""
        if key in ("left", "right"):
            return self.horizontal
        if key in ("up", "down"):
            return self.vertical
        if key in ("backspace", "delete"):
            return self.delete
        return None
