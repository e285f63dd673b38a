"""
Internship and career applications: public submission, admin review, CSV export.
"""
