"""Type aliases used across Slipstream."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
EmployeeCode = str
Period = str  # internal month form, "M/YYYY"
Row = list[str]
