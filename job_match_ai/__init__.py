"""Job Match AI: reciprocal job/candidate scoring and top-K ranking."""

__version__ = "0.1.0"
