"""liftcoach: training stimulus analytics and exercise suggestions."""

__version__ = "0.1.0"
