"""
Retail Banking System

A small retail-banking domain with composable account behaviour: bonus
rules chained at account opening, swappable interest strategies, broadcast
transaction notifications and step-by-step loan agreement construction.
"""

__version__ = "1.0.0"
