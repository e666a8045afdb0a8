"""
Core contracts.

- ports.py: Protocols and type aliases the scheduler depends on
- events.py: notification records delivered to event sinks
"""
