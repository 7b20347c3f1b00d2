"""Corewar virtual machine parts: instruction table, arena, champion loading, decoding and options."""

__version__ = "0.1.0"

__all__ = ["arena", "champion", "decoder", "ops", "options", "strutil", "vm"]