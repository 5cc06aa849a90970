"""Core infrastructure: configuration, logging, command execution."""
