"""
Web interface module for the Americano scheduler.

Provides a FastAPI-based server for:
- Stateless scheduling calls (stats, coverage, recommendation, round)
- Running tournament sessions held in memory
"""
