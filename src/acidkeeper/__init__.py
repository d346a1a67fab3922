"""Acidkeeper - Manual compaction requests for Hive ACID tables."""

__version__ = "0.1.0"
