"""A/B benchmark harness for two-stage global optimizers."""

__version__ = "0.1.0"
