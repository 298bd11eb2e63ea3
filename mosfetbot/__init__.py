"""Building blocks for a turn-based shuttle strategy agent: configuration, logging,
observation parsing, energy accounting, relic constraint solving and job planning."""

__version__ = "0.1.0"