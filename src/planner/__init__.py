"""Local task planner: task and preference persistence."""

__version__ = "0.1.0"
