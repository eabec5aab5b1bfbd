from .accumulator import StressAccumulator
from .signals import Signal

__all__ = ["StressAccumulator", "Signal"]
