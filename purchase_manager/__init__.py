"""
Purchase Manager - Source Package

A single-user record manager for purchase line items: enter, edit,
delete, filter and total them, and move the whole list in and out as a
JSON document.

DESIGN PRINCIPLES:
1. One draft, one edit target, cleared as soon as it is used
2. Numbers are numbers once stored; bad numeric input becomes 0
3. Every change is persisted before control returns
4. A failed import changes nothing
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Purchase Manager Team"
