"""
phase_loop: a cooperative, phase-ordered task scheduler.

Packages:
- scheduler/: bounded priority queue, paint gate and the phase loop itself
- core/: ports (Protocols) and event records shared by every layer
- connectors/: event sinks (console, logging)
- demo/: randomized task producer used by the CLI
- cli/: composition root and process entry point
"""

__version__ = "0.1.0"
