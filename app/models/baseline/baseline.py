"""Baseline (one unit's result for one cycle) model."""

BASELINE_DDL = """
CREATE TABLE IF NOT EXISTS baseline (
    unit_code VARCHAR NOT NULL,
    cycle INTEGER NOT NULL,
    total_votes BIGINT NOT NULL,
    votes_by_party JSON NOT NULL,
    PRIMARY KEY (unit_code, cycle)
)
"""
