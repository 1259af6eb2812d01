"""
Model training, classification and evaluation for SupplierML.

- `backend` wraps the scikit-learn classifier behind a small protocol.
- `trainer` holds the current model and its untrained/trained state.
- `metrics` provides aggregate and per-class metric helpers.
"""
