"""Helpers for web application firewall rule sets: regex-assembly parsing, evasion patterns, test renumbering."""

__version__ = "2.0.0"