"""Static reference datasets.

Regulatory text tables, subscription tiers, CQC inspection material and
help articles. These are read-only module-level constants.
"""
