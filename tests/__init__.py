"""
Test Suite for Expense Splitter

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration and CLI workflow tests

Test Categories:
- Core utilities (currency, models, config)
- Split strategies
- Balances and settlement plans
- In-memory ledger service
- Command-line interface
"""
