"""
Command Line Interface Package

Command-line front end for the splitting and settlement engine.

Command Structure:
- expense-splitter: Main entry point with utility commands (version, config)
- expense-splitter split: Divide one expense among participants
- expense-splitter settle: Balances and settlement plan from a JSON ledger file
"""
