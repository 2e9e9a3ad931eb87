"""Training analytics & adherence engine."""

__version__ = "0.1.0"
