"""Outbound HTTP binding: turns item commands into HTTP requests."""
