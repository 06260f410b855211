"""
SafeConfig: service-topology invariant checks and drift diffing.
"""

__version__ = "0.1.0"
