from .stress_bar import StressBar, stress_to_color

__all__ = ["StressBar", "stress_to_color"]
