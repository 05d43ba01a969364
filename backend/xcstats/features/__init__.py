"""
Feature modules.

Each feature contains:
- models.py: dataclasses (no DB dependency)
- service.py: pure computations over result collections
"""
