"""
Scheduler subsystem.

Components:
- models.py: data structures (Task, Phase)
- heap.py: fixed-capacity binary min-heap used for every phase queue
- gate.py: time-based paint gate deciding when frame tasks may run
- loop.py: the phase loop that drains the three queues
"""

from .gate import PaintGate
from .heap import BoundedPriorityQueue
from .loop import PhaseScheduler
from .models import Phase, Task

__all__ = ["BoundedPriorityQueue", "PaintGate", "Phase", "PhaseScheduler", "Task"]
