"""
Cashflow Helper - Source Package

A personal finance companion for the cashflow board game. One player
tracks cash, assets, liabilities and a transaction ledger while the
engine derives monthly cash flow and the move to the Fast Track.

DESIGN PRINCIPLES:
1. Derived figures are pure functions of the player snapshot
2. Every action is atomic: clone, mutate, evaluate, commit
3. Rejected actions never change state
4. The ledger is append-only
5. Storage is an observer, never a dependency of the core
"""

__version__ = "1.0.0"
__author__ = "Cashflow Helper Team"
