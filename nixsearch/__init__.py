"""Search the NixOS package index from Python."""

__version__ = "0.1.0"
