"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (content API over HTTP,
    local settings storage, and an in-memory content double) used by use cases.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``indavco_admin.app.controller`` for runtime wiring and by
    tests for doubles and transport-level behavior verification.
"""
