"""
FastAPI service for SupplierML.

Exposes endpoints to:
- Train the supplier classifier from an uploaded or server-local CSV.
- Classify a single supplier record.
- Evaluate the current model and report per-class metrics.
"""
