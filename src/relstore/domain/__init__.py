"""Domain layer for relstore.

Services are imported from their modules (``relstore.domain.store`` etc.);
this package stays import-light so the database layer can depend on
``relstore.domain.entities`` without a cycle.
"""
