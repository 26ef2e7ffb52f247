"""PRRisk: production risk scoring for code changes of any size."""

__version__ = "0.1.0"
