from datetime import datetime, time, timezone

import pytest
from pydantic import ValidationError

from fra_atlas.schemas.claims import ClaimCreate, ClaimType, Coordinates, parse_coordinates
from fra_atlas.schemas.digitization import ExtractionResult, ExtractTextRequest
from fra_atlas.schemas.exports import ExportFilters, ExportRequest


def claim_payload(**overrides):
    payload = {
        "claim_type": "individual",
        "village": "Khairwani",
        "district": "Mandla",
        "state": "Madhya Pradesh",
        "claim_description": "Cultivation land held since 1998",
    }
    payload.update(overrides)
    return payload


class TestParseCoordinates:
    def test_string_pair(self):
        assert parse_coordinates("22.59, 80.37") == {"lat": 22.59, "lng": 80.37}

    @pytest.mark.parametrize("value", ["22.59", "north, east", "1, 2, 3", ""])
    def test_unparseable_string_is_none(self, value):
        assert parse_coordinates(value) is None

    def test_mapping_passes_through(self):
        assert parse_coordinates({"lat": 1, "lng": 2}) == {"lat": 1, "lng": 2}


class TestClaimCreate:
    def test_coordinate_string_accepted(self):
        claim = ClaimCreate(**claim_payload(coordinates="22.59,80.37"))
        assert claim.coordinates == Coordinates(lat=22.59, lng=80.37)

    def test_bad_coordinate_string_dropped(self):
        claim = ClaimCreate(**claim_payload(coordinates="somewhere in the forest"))
        assert claim.coordinates is None

    def test_out_of_range_coordinates_rejected(self):
        with pytest.raises(ValidationError):
            ClaimCreate(**claim_payload(coordinates={"lat": 120, "lng": 80}))

    def test_blank_land_area_is_none(self):
        assert ClaimCreate(**claim_payload(land_area="  ")).land_area is None

    def test_negative_land_area_rejected(self):
        with pytest.raises(ValidationError):
            ClaimCreate(**claim_payload(land_area=-1))

    def test_whitespace_only_village_rejected(self):
        with pytest.raises(ValidationError):
            ClaimCreate(**claim_payload(village="   "))

    def test_short_description_rejected(self):
        with pytest.raises(ValidationError):
            ClaimCreate(**claim_payload(claim_description="too short"))

    def test_unknown_claim_type_rejected(self):
        with pytest.raises(ValidationError):
            ClaimCreate(**claim_payload(claim_type="habitat"))

    def test_defaults(self):
        claim = ClaimCreate(**claim_payload(claim_type="community"))
        assert claim.claim_type == ClaimType.COMMUNITY
        assert claim.documents == []
        assert claim.land_area is None


class TestWireNames:
    def test_extract_request_accepts_camel_case(self):
        request = ExtractTextRequest.model_validate({"imageUrl": "https://x/y.png", "fileName": "y.png"})
        assert request.image_url == "https://x/y.png"
        assert request.file_name == "y.png"

    def test_extraction_result_dumps_camel_case(self):
        result = ExtractionResult(raw_text="text", structured_data=None, confidence=0.85)
        dumped = result.model_dump(by_alias=True)
        assert dumped["rawText"] == "text"
        assert dumped["structuredData"] is None

    def test_export_request_defaults_to_csv(self):
        request = ExportRequest.model_validate({"filters": {"status": "approved", "startDate": "2024-01-01"}})
        assert request.format.value == "csv"
        assert request.filters.status.value == "approved"
        assert request.filters.start_date == datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestExportDateBounds:
    def test_plain_dates_cover_whole_days(self):
        filters = ExportFilters.model_validate({"startDate": "2024-03-14", "endDate": "2024-03-15"})
        assert filters.start_date == datetime(2024, 3, 14, tzinfo=timezone.utc)
        assert filters.end_date == datetime.combine(datetime(2024, 3, 15).date(), time.max, tzinfo=timezone.utc)

    def test_iso_timestamps_are_kept_exact(self):
        filters = ExportFilters.model_validate(
            {"startDate": "2024-03-14T18:30:00.000Z", "endDate": "2024-03-15T06:00:00+05:30"}
        )
        assert filters.start_date == datetime(2024, 3, 14, 18, 30, tzinfo=timezone.utc)
        assert filters.end_date == datetime(2024, 3, 15, 0, 30, tzinfo=timezone.utc)
        assert filters.end_date.tzinfo == timezone.utc

    def test_bad_date_is_rejected(self):
        with pytest.raises(ValidationError):
            ExportFilters.model_validate({"startDate": "14/03/2024"})
