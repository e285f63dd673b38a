"""Testimonials: admin-moderated, public only when approved and featured."""
