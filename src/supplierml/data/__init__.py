"""
Data layer for SupplierML.

Includes:
- Dataset schema, record types and validation (`schema`)
- CSV loading and upload storage (`data_loader`)
"""
