"""Domain layer for the DRE engine.

Services are imported from their modules directly (for example
``dre_engine.domain.report``) so that the database layer can import the
entities without a circular import.
"""
