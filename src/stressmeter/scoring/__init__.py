from .score_counter import ScoreCounter

__all__ = ["ScoreCounter"]
