"""Business-logic layer (MongoDB-backed care logs, notifications and role lookup).

Health-alert evaluation lives in:
- health_monitor.py (rule evaluation, notification fan-out, optional sweep loop)
- records.py (stored document <-> API model conversion)
"""

# Import side-effects are intentionally avoided here; modules are imported by routers/services as needed.
