"""Type hints used in Swiss Pairing."""

from typing import TYPE_CHECKING, Literal, Tuple

if TYPE_CHECKING:
    from swisspairing.player import Player

# Chess color string constants (for runtime use)
WHITE = "White"
BLACK = "Black"

# Basically, white or black
Colour = Literal["White", "Black"]

# Player ids are plain strings
PlayerId = str

# Two players about to meet, colours not yet decided
PlayerPair = Tuple["Player", "Player"]
