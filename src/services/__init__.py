"""
Service layer.

Async review API consumed by the hotel detail page.
"""
