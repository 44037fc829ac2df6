"""Building blocks for CKB account services: config loading, hex and TRON address helpers, chain types, transaction building and signing, tx-pool tracking and cell helpers."""

__version__ = "0.1.0"