"""
Feature engineering for SupplierML.

- `feature_builder` concatenates numeric fields and encodes/decodes labels.
"""
