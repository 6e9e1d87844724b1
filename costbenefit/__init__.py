"""Cost-benefit and risk evaluation for software projects."""

__version__ = "0.1.0"
