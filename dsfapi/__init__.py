"""Typed commands, codes, init messages and machine model helpers for the DuetControlServer JSON protocol."""

__version__ = "2.0.0"