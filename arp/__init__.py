"""arp: an interpreter for a small parenthesized scripting language."""

from arp.interpreter import interpret

__all__ = ["interpret"]
