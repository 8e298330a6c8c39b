"""
Risk Calc App - Prop Firm Risk Calculator

Turns a trader's account-risk constraints (max loss, trades until the account
is lost, daily loss cap, stop size in ticks, instrument tick value) into a
suggested contract count and the related per-trade and per-day risk figures.
"""

__version__ = "0.1.0"
__author__ = "Risk Calc Team"
