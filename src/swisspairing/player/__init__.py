from swisspairing.player.base_player import NO_COLOUR_NEED, ColourNeed, Player

__all__ = [
    "Player",
    "ColourNeed",
    "NO_COLOUR_NEED",
]
