"""smartflow_server — FastAPI REST API for the Smart Flow SDK.

Exposes route classification, step navigation, transcript extraction,
range validation and reference data as a stateless HTTP API.
"""
