"""
Storage subsystem.

Components:
- paths.py: data directory resolution
- codec.py: JSON document encode/decode with size-tiered formatting
- collection_store.py: load / replace_all over named collection files
- errors.py: error taxonomy shared by every layer above
"""
