"""
Core domain models, quantity parsing, and boundary contracts.

This module contains the foundational building blocks that are independent
of external systems (store, router, quote feeds).
"""
