"""
Core module for shared domain infrastructure.

This module contains:
- Domain events and exceptions
- Infrastructure abstractions
- Middleware components
- Shared utilities
"""
