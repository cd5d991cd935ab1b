"""
Mealwise - Household meal planning service.

Households rate meals and foods green/amber/red, then ask for an
LLM-generated weekly plan that can be swapped, reshuffled slot by slot,
and turned into a shopping list.
"""

__version__ = "1.0.0"
