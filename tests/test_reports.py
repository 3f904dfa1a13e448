"""Report selection and request bodies."""

from unittest.mock import MagicMock

import pytest

from gsc_fetch.reports import DimensionReport, SummaryReport, get_report, reports_for_type

DATE_RANGE = {"startDate": "2024-05-03", "endDate": "2024-05-31"}


class TestReportsForType:

    @pytest.mark.parametrize("report_type, expected", [
        ("summary", ["summary"]),
        ("query", ["query"]),
        ("page", ["page"]),
        ("all", ["summary", "query", "page"]),
    ])
    def test_selection(self, report_type, expected):
        assert reports_for_type(report_type) == expected

    def test_unknown(self):
        with pytest.raises(ValueError):
            reports_for_type("device")


class TestRequestBody:

    def test_summary_has_no_dimensions(self):
        report = get_report("summary", date_range=DATE_RANGE, row_limit=25)
        assert isinstance(report, SummaryReport)
        assert report.request_body() == DATE_RANGE

    def test_query_report(self):
        report = get_report("query", date_range=DATE_RANGE, row_limit=10)
        assert isinstance(report, DimensionReport)
        assert report.output_key == "topQueries"
        assert report.request_body() == dict(DATE_RANGE, dimensions=["query"], rowLimit=10)

    def test_page_report(self):
        report = get_report("page", date_range=DATE_RANGE, row_limit=25)
        assert report.output_key == "topPages"
        assert report.request_body()["dimensions"] == ["page"]


class TestSync:

    def test_summary_without_rows(self):
        client = MagicMock()
        client.query.return_value = []
        report = get_report("summary", client=client, site_url="sc-domain:example.com", date_range=DATE_RANGE)
        assert report.sync() == {"clicks": 0, "impressions": 0, "ctr": 0, "position": 0}
        client.query.assert_called_once_with("sc-domain:example.com", DATE_RANGE)

    def test_query_rows_are_normalized(self):
        client = MagicMock()
        client.query.return_value = [
            {"keys": ["python dates"], "clicks": 30, "impressions": 900, "ctr": 0.0333333, "position": 2.46},
        ]
        report = get_report("query", client=client, site_url="sc-domain:example.com",
                            date_range=DATE_RANGE, row_limit=25)
        assert report.sync() == [
            {"keys": ["python dates"], "clicks": 30, "impressions": 900, "ctr": 0.0333, "position": 2.5},
        ]
