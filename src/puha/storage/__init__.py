"""Persistence boundary for the tree.

    base.py       # StateStorage protocol: load() / save(store)
    document.py   # NodeStore <-> plain nested dict, with full re-validation
    json_file.py  # JSON file implementation of StateStorage
"""
