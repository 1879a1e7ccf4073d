"""Synteny window index: per-gene family landscapes over annotated genomes."""

__version__ = "0.1.0"
