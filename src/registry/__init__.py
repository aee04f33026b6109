"""
Review Store Module.

Single source of truth for hotel reviews.
Manages the in-memory review collection, id assignment and write validation.
"""
