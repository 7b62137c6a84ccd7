"""gambit — chess rules core with a minimax opponent."""

__version__ = "0.1.0"
