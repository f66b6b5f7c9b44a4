"""Depth-first traversal of a directory tree with filtering and pruning.

This package provides the directory listing primitive, the entry model it produces,
and the lister that walks and prints the filtered tree.
"""
