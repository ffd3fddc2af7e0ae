"""PAC Toolkit - read, extract and build PAC game archives."""

__version__ = "0.3.0"
