"""nodewatch - network commands for Pactus blockchain nodes."""

__version__ = "0.1.0"
