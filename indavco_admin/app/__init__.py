"""Application composition layer for the admin console.

The controller wires settings, adapters, use cases and page viewmodels into a
runnable console without placing business logic in views.
"""
