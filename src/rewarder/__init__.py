"""Settings layer for the task rewarder plugin."""

__version__ = "0.1.0"
