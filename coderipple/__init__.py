"""
coderipple: dependency graph and ripple reachability for uploaded source trees.
"""

__version__ = "0.1.0"
