"""beatsync: content-addressed sync of level packages into a local library."""

__version__ = "0.1.0"
