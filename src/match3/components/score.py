from dataclasses import dataclass

@dataclass(slots=True)
class Score:
    """Running score for the current game."""
    total: int = 0
    last_delta: int = 0
