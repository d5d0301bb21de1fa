"""Per-round simulation context owned by the caller."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .cards import Card
from .errors import ValidationError

MAX_PRIVATE = 2
BOARD_SIZE = 5
NEUTRAL_POT_ODDS = 0.5


@dataclass
class SimulationContext:
    """Everything known about the current decision round.

    Set up by the caller before asking for a decision and cleared with
    :meth:`end_round` before the next one.
    """

    private: List[Card] = field(default_factory=list)
    public: List[Card] = field(default_factory=list)
    num_opponents: int = 1
    call: float = 0
    blind: float = 0
    pot: float = 0
    cash: float = 1000

    def set_pot_odds(self, call: float, blind: float, current_pot: float) -> None:
        self.call = call
        self.blind = blind
        self.pot = current_pot

    @property
    def pot_odds(self) -> float:
        if self.call != 0:
            return self.call / (self.call + float(self.pot))
        return NEUTRAL_POT_ODDS

    def known_cards(self) -> List[Card]:
        return list(self.private) + list(self.public)

    def validate(self) -> None:
        """Raise :class:`ValidationError` when the context cannot be simulated."""

        if len(self.private) > MAX_PRIVATE:
            raise ValidationError(f"At most {MAX_PRIVATE} private cards, got {len(self.private)}")
        if len(self.public) > BOARD_SIZE:
            raise ValidationError(f"At most {BOARD_SIZE} public cards, got {len(self.public)}")
        known = self.known_cards()
        seen = set()
        for card in known:
            if card in seen:
                raise ValidationError(f"Duplicate card: {card.code}")
            seen.add(card)
        if self.num_opponents < 0:
            raise ValidationError("Opponent count must not be negative")
        for label in ("call", "blind", "pot", "cash"):
            if getattr(self, label) < 0:
                raise ValidationError(f"{label} must not be negative")

    def end_round(self) -> None:
        self.private = []
        self.public = []
        self.call = 0


__all__ = ["SimulationContext", "NEUTRAL_POT_ODDS", "BOARD_SIZE", "MAX_PRIVATE"]
