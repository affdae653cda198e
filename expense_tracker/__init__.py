"""
Expense Tracker - Source Package

A personal expense tracker: users sign up, record expenses against
their monthly salary, and review totals, category splits and savings.

DESIGN PRINCIPLES:
1. One explicit store object, no ambient globals
2. Every mutation is persisted immediately
3. Persistence failures never crash the app
4. Derived figures are pure functions
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
