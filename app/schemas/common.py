# app/schemas/common.py
from __future__ import annotations

"""Integer ranges shared by request models and route parameters.

Identifiers are BIGINT columns; years, counts and paging values are 32-bit.
Anything outside these ranges is rejected as bad input before it reaches the
database driver.
"""

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

__all__ = ["INT32_MIN", "INT32_MAX", "INT64_MIN", "INT64_MAX"]
