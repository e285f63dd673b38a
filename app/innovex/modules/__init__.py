"""
Feature modules live under this package.

Each module owns its models, service functions and admin routes, while reusing
platform primitives (auth, role gate, audit, storage, DB session).
"""
