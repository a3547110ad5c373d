"""Schedule generation and bracket grouping."""

from .services import ScheduleFormat, ScheduleGenerator, bracket_rounds, create_match

__all__ = ["ScheduleFormat", "ScheduleGenerator", "bracket_rounds", "create_match"]
