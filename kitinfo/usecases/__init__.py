"""Use-case layer for the interactive kit workflow.

Modules here coordinate domain objects and ports without performing transport
or console I/O directly.
"""
