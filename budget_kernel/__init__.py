"""
Budget Kernel

Envelope-budgeting core with:
- Zero-based "Ready to Assign" accounting
- Per-envelope carryover that depends on envelope type
- Integer minor-unit arithmetic throughout
- Structured, typed errors and JSON logging
"""

__version__ = "0.1.0"
