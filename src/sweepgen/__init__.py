"""Tournament validation and sweepstake prize generation."""

__version__ = "0.1.0"
