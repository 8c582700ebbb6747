"""Core types, configuration and exceptions for pagelookup."""
