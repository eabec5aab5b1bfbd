"""
Interactable
=============
Proximity interaction trigger without the 3D parts: the game client
reports the player's distance and presses, this model decides whether an
interaction fires and tells its listeners.
"""

import logging

from ..core.signals import Signal

logger = logging.getLogger(__name__)


class Interactable:
    """A world object the player can walk up to and use."""

    def __init__(self, name: str, hint: str = "Press E or click",
                 interaction_distance: float = 3.0, exit_range: float = 0.0,
                 interactable: bool = True):
        """
        Args:
            name: Display name
            hint: Prompt shown while the player looks at the object
            interaction_distance: Max distance at which interact() is allowed
            exit_range: Distance at which exited_range fires (0 = interaction_distance)
            interactable: Initial enabled state
        """
        self.name = name
        self.hint = hint
        self.interaction_distance = interaction_distance
        self.exit_range = exit_range
        self.interactable = interactable

        self.interacted = Signal("interacted")
        self.exited_range = Signal("exited_range")

    @property
    def effective_exit_range(self) -> float:
        return self.exit_range if self.exit_range > 0 else self.interaction_distance

    def in_range(self, distance: float) -> bool:
        return distance <= self.interaction_distance

    def interact(self, distance: float = 0.0) -> bool:
        """Fire the interaction if enabled and the player is close enough."""
        if not self.interactable or not self.in_range(distance):
            return False
        logger.info(f"Interaction: {self.name}")
        self.interacted.emit()
        return True

    def exit_range_reached(self, distance: float) -> bool:
        """Called as the player moves away; fires once past the exit range."""
        if distance <= self.effective_exit_range:
            return False
        logger.debug(f"Left range: {self.name}")
        self.exited_range.emit()
        return True

    def set_interactable(self, interactable: bool):
        self.interactable = interactable

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "hint": self.hint,
            "interactable": self.interactable,
            "interaction_distance": self.interaction_distance,
        }
