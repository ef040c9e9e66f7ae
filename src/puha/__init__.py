"""puha — personal inventory organized as a tree of spaces and items.

Layout:
    puha/
    ├── tree/       # NodeStore, PathResolver, TreeRenderer (pure, no I/O)
    ├── storage/    # StateStorage protocol, document conversion, JSON file backend
    ├── core.py     # Inventory: path-addressed commands over one tree
    ├── config.py   # puha.toml + PUHA_* environment variables
    └── __main__.py # command line entry point
"""
