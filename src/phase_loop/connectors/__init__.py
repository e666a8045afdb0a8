"""
Event sinks.

- sinks.py: console / logging / fan-out implementations of core.ports.EventSink
"""
