"""Unit (county / riding) model."""

UNIT_DDL = """
CREATE TABLE IF NOT EXISTS unit (
    code VARCHAR PRIMARY KEY,
    parent_region VARCHAR NOT NULL,
    name VARCHAR
)
"""
