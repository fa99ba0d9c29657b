"""
Domain layer - Core pricing logic and models.

This module contains the basket entities and the pricing rules,
isolated from external concerns like HTTP and configuration.
"""
