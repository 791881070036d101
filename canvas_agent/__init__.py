"""Canvas command agent: free-text commands to bounds-checked canvas edit operations."""

__version__ = "0.1.0"
