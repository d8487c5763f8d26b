"""Application composition layer for the console tool.

Modules in this package wire settings, adapters, the console interaction
surface, and the menu flow into a runnable session.
"""
