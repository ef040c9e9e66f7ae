"""In-memory tree model — spaces, items and the invariants that bind them.

Layout:
    NodeStore      # owns records, assigns identities, validates every mutation
    PathResolver   # "Home/Bedroom/Closet" or a bare name → identity
    TreeRenderer   # lazy pre-order lines for display

Nothing in this package performs I/O or logs; failures are raised as
subclasses of `PuhaError` carrying the offending name, path or identity.
"""
