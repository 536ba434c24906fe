"""
TK4TreeSim
Pairwise similarity of symbol sequences over a category tree
"""

__version__ = "0.1.0"
