"""
Services layer - Business logic goes here.

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- request_validator.py: the only gate before any write
- report_service.py: orchestrates one submission across the stores
- storage/: one adapter per backing store, no cross-store transactions
"""
