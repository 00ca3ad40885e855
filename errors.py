from typing import Optional


class SimulationError(Exception):
    """Base class for everything the simulator raises on bad input."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self):
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class InvalidPlacement(SimulationError, ValueError):
    """A piece's footprint would hang off the side of the board."""


class BoardOverflow(SimulationError):
    """A piece would have to lock above the top of the board."""


class TokenError(SimulationError, ValueError):
    """A placement token could not be decoded."""
