"""Use-case layer for content administration workflows.

Each module wraps one ``ResourcePort`` interaction, translating adapter
failures into ``UseCaseError`` subclasses without performing transport I/O
directly.
"""
