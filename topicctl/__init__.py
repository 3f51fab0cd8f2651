"""Kafka topic settings validation, REPL input parsing and plain-text reports."""

__version__ = "1.7.0"