"""Global Economics — console reports over a regional economic indicators dataset."""

__version__ = "0.1.0"
