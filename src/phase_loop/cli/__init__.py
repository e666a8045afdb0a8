"""
Process entry point.

- bootstrap.py: composition root (settings -> sink -> scheduler)
- main.py: `phase-loop` console script
"""
