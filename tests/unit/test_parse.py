"""Tests for feed parsing and the raw baseline schema."""

import pytest
from pydantic import ValidationError

from etl.parse import parse_record, parse_records, parse_timeline
from swing_client import RawBaselineSchema


class TestRawBaselineSchema:
    def test_feed_column_names(self):
        row = RawBaselineSchema.model_validate(
            {"fips": "19001", "stateFips": "19", "countyName": "Adair", "totalVotes2024": 1200,
             "votesGop2024": 700, "votesDem2024": 470}
        )
        assert (row.code, row.region, row.name) == ("19001", "19", "Adair")
        assert row.party_votes() == {"GOP": 700, "DEM": 470}

    def test_short_names(self):
        row = RawBaselineSchema.model_validate({"code": "55003", "total": 900, "gop": 320, "dem": 550})
        assert row.total_votes == 900
        assert row.region == "55"

    def test_numeric_code_padded(self):
        assert RawBaselineSchema.model_validate({"fips": 1001, "total": 1, "gop": 0, "dem": 1}).code == "01001"

    def test_geo_id_keeps_last_five(self):
        row = RawBaselineSchema.model_validate({"fips": "0500000US19001", "total": 1, "gop": 1, "dem": 0})
        assert row.code == "19001"

    def test_numeric_region_padded(self):
        row = RawBaselineSchema.model_validate({"fips": 1001, "stateFips": 1, "total": 1, "gop": 1, "dem": 0})
        assert row.region == "01"
        assert row.region == row.code[:2]
        row = RawBaselineSchema.model_validate({"fips": "06037", "stateFips": "6", "total": 1, "gop": 1, "dem": 0})
        assert row.region == "06"

    def test_blank_region_falls_back_to_code(self):
        row = RawBaselineSchema.model_validate(
            {"fips": "19001", "stateFips": " ", "countyName": "", "total": 1, "gop": 1, "dem": 0}
        )
        assert row.region == "19"
        assert row.name is None

    def test_votes_by_party(self):
        row = RawBaselineSchema.model_validate(
            {"fips": "19001", "total": 100, "votesByParty": {"gop": 40, "dem": 50, "lib": 5}}
        )
        assert row.party_votes() == {"GOP": 40, "DEM": 50, "LIB": 5}

    def test_explicit_fields_override_mapping(self):
        row = RawBaselineSchema.model_validate(
            {"fips": "19001", "total": 100, "gop": 45, "votesByParty": {"GOP": 40, "DEM": 50}}
        )
        assert row.party_votes() == {"GOP": 45, "DEM": 50}

    @pytest.mark.parametrize(
        "raw",
        [
            {"total": 10, "gop": 5, "dem": 5},
            {"fips": "  ", "total": 10, "gop": 5, "dem": 5},
            {"fips": "19001", "gop": 5, "dem": 5},
            {"fips": "19001", "total": -1, "gop": 5, "dem": 5},
            {"fips": "19001", "total": 10, "gop": -5, "dem": 5},
            {"fips": "19001", "total": 10, "gop": 5},
            {"fips": "19001", "total": 10, "votesByParty": {"GOP": -1}},
            {"fips": "19001", "total": "many", "gop": 5, "dem": 5},
        ],
    )
    def test_malformed(self, raw):
        with pytest.raises(ValidationError):
            RawBaselineSchema.model_validate(raw)


class TestParse:
    def test_parse_record(self):
        record, unit = parse_record({"fips": "19001", "total": 10, "gop": 6, "dem": 4}, 2020)
        assert record.cycle == 2020
        assert (record.gop_votes, record.dem_votes) == (6, 4)
        assert unit.parent_region == "19"
        assert unit.name == "County"

    def test_drops_are_counted(self):
        result = parse_records(
            [
                {"fips": "19001", "total": 10, "gop": 6, "dem": 4},
                {"fips": "19003", "total": 10},
                "not a row",
                {"fips": "19005", "total": 0, "gop": 0, "dem": 0},
            ],
            2024,
        )
        assert [r.unit_code for r in result.records] == ["19001", "19005"]
        assert result.dropped == 2

    def test_last_duplicate_wins(self):
        result = parse_records(
            [
                {"fips": "19001", "total": 10, "gop": 6, "dem": 4},
                {"fips": "19001", "total": 12, "gop": 5, "dem": 7},
            ],
            2024,
        )
        assert len(result.records) == 1
        assert result.records[0].total_votes == 12

    def test_not_a_list(self):
        result = parse_records({"fips": "19001"}, 2024)
        assert result.records == []
        assert result.dropped == 0

    def test_timeline(self):
        parsed = parse_timeline(
            {
                "2020": [{"fips": "19001", "total": 10, "gop": 6, "dem": 4}],
                "2024": [{"fips": "19001", "total": 12, "gop": 5, "dem": 7}],
                "meta": {"source": "feed"},
            }
        )
        assert sorted(parsed) == [2020, 2024]
        assert parsed[2024].records[0].cycle == 2024

    def test_extend(self):
        a = parse_records([{"fips": "19001", "total": 10, "gop": 6, "dem": 4}], 2024)
        a.extend(parse_records([{"fips": "19003"}], 2024))
        assert len(a.records) == 1
        assert a.dropped == 1
