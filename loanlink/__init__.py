"""
LoanLink - Microloan Marketplace Backend

A FastAPI-based service that handles loan applications, their
approval lifecycle, and application-fee payment settlement.
"""

__version__ = "0.1.0"
