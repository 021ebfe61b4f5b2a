"""
Americano doubles tournament scheduler.

Fair-round generation, partner coverage and standings for round-robin
doubles played across a fixed number of courts.
"""

__version__ = "1.0.0"
