"""Fraud Review Service.

This service provides APIs for:
- Registering and logging in users and administrators
- Submitting transactions, each classified as pending or flagged
  by heuristic fraud rules at submission time
- Reviewing transactions as an administrator (approve, flag, delete)
"""

__version__ = "0.1.0"
