"""Core - pure domain code: errors, enums and loyalty rules. No I/O."""
