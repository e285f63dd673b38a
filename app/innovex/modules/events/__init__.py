"""
Events module.

- Events CRUD (admin) and the public listing
- Public registration with an optional registration deadline
- Registration status workflow + CSV export (admin)
"""
