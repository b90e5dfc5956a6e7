# Donation Service Contracts

"""
Donation Service Contract Module

This module contains:
- data_contract.py: test data factories and reference values for the
  donation ledger and the award registry
"""
