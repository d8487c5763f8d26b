"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (Typekit HTTP API,
    settings file storage, and the offline kit gateway) used by the menu flow.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``kitinfo/app/controller.py`` for runtime wiring and by tests
    for doubles and transport-level behavior verification.
"""
