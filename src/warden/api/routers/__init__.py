"""HTTP routers.  Each module exposes a module-level ``router``."""
