"""Services - multi-statement operations that do not fit a single route helper."""
