"""Data validation functions."""

import json

import duckdb


def validate_cycle(conn: duckdb.DuckDBPyConnection, cycle: int) -> dict:
    """Validate baseline integrity for a cycle."""
    issues = []
    stats = {}

    rows = conn.execute(
        "SELECT unit_code, total_votes, votes_by_party FROM baseline WHERE cycle = ?",
        [cycle],
    ).fetchall()
    stats["records"] = len(rows)
    if not rows:
        issues.append("No baseline records found")

    stats["not_reporting"] = sum(1 for r in rows if r[1] <= 0)
    stats["total_votes"] = sum(max(0, r[1]) for r in rows)

    over = 0
    for _, total, votes in rows:
        parties = json.loads(votes) if isinstance(votes, str) else (votes or {})
        if sum(parties.values()) > total:
            over += 1
    # Party totals may under-sum turnout; over-sum is reported, not rejected
    stats["party_over_total"] = over

    orphans = conn.execute(
        """
        SELECT COUNT(*) FROM baseline b
        LEFT JOIN unit u ON u.code = b.unit_code
        WHERE b.cycle = ? AND u.code IS NULL
        """,
        [cycle],
    ).fetchone()[0]
    stats["orphans"] = orphans
    if orphans:
        issues.append(f"{orphans} records reference unknown units")

    regions = conn.execute(
        """
        SELECT COUNT(DISTINCT u.parent_region) FROM baseline b
        JOIN unit u ON u.code = b.unit_code
        WHERE b.cycle = ?
        """,
        [cycle],
    ).fetchone()[0]
    stats["regions"] = regions

    return {
        "cycle": cycle,
        "valid": len(issues) == 0,
        "stats": stats,
        "issues": issues,
    }
