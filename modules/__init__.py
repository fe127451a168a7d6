"""
Modules Package

Business Logic Layer

Modules:
- tax: Tax computation engine (rules, models, messages)

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

__all__ = ['tax']
