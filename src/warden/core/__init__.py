"""
Core primitives for warden: errors, logging, principals, permissions,
resource types, hashing, the ORM layer and the resource repository.

Apart from the health router factory, nothing here knows about HTTP or the CLI.
"""
