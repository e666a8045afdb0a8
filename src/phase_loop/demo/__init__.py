"""
Demonstration producer.

- producer.py: generates randomized immediate/background/frame tasks
  and feeds them to a PhaseScheduler
"""
