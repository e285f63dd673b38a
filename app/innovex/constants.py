"""
Closed value sets shared by models, forms and admin screens.
"""
from __future__ import annotations

ROLE_ADMIN = "admin"
ROLES = ("admin", "moderator", "user")

EVENT_TYPES = ("workshop", "hackathon", "bootcamp", "masterclass")

REGISTRATION_STATUSES = ("pending", "accepted", "rejected")

APPLICATION_KINDS = ("internship", "career")
APPLICATION_STATUSES = ("pending", "reviewed", "accepted", "rejected")

# (value, label) pairs for select boxes
BLOG_CATEGORIES = (
    ("news", "News"),
    ("tech", "Technology"),
    ("events", "Events"),
    ("tutorials", "Tutorials"),
)

PRODUCT_CATEGORIES = (
    ("ai", "AI Solutions"),
    ("cloud", "Cloud Tools"),
    ("iot", "IoT Projects"),
    ("web", "Web Apps"),
)

TESTIMONIAL_RATINGS = (5, 4, 3, 2, 1)
