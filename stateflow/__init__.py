"""
StateFlow - A lightweight finite-state-machine workflow engine.

Declare workflow definitions made of states and actions, then start
instances of them and move each instance through its states one action
at a time.
"""

__version__ = "1.0.0"
