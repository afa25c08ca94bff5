"""fretchord — guitar chord diagrams from tabular chord records."""

__version__ = "0.1.0"
