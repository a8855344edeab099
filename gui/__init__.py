"""UI-facing layer over the grid navigation store.

Views never reach for a global store. They receive an ``AppState`` that
carries the session's store by reference, and use ``GridManagement`` for
the per-grid operations a data grid screen needs.
"""
