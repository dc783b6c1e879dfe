from .player import Player, Profession, Race

__all__ = [
    "Player",
    "Profession",
    "Race",
]
