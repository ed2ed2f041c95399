"""
Exceptions raised by the Minesweeper engine.
"""


class ConfigurationError(ValueError):
    """Invalid board dimensions, mine count or difficulty preset."""
