"""venncv: Venn-style research project maps with automatic layout."""

__version__ = "0.1.0"
