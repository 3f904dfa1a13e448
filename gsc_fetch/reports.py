import singer

from .normalize import normalize_rows, normalize_summary

logger = singer.get_logger()

AVAILABLE_REPORTS = [
    'summary',
    'query',
    'page'
]
REPORT_TYPES = {
    'summary': ['summary'],
    'query': ['query'],
    'page': ['page'],
    'all': AVAILABLE_REPORTS
}


def reports_for_type(report_type):
    if report_type not in REPORT_TYPES:
        raise ValueError(f"The report type {report_type} doesn't exist")
    return list(REPORT_TYPES[report_type])


class Report:
    output_key = None

    def __init__(self, name, client=None, site_url=None, date_range=None, row_limit=None):
        if name not in AVAILABLE_REPORTS:
            raise ValueError(f"The report {name} doesn't exist")
        self.name = name
        self.client = client
        self.site_url = site_url
        self.date_range = date_range
        self.row_limit = row_limit

    def request_body(self):
        return {
            'startDate': self.date_range['startDate'],
            'endDate': self.date_range['endDate'],
        }

    def normalize(self, rows):
        raise NotImplementedError

    def sync(self):
        logger.info(f'syncing {self.name}')
        rows = self.client.query(self.site_url, self.request_body())
        logger.info(f'{self.name}: {len(rows)} rows')
        return self.normalize(rows)


class SummaryReport(Report):
    """Site totals over the date range: no dimension, a single row back."""
    output_key = 'summary'

    def normalize(self, rows):
        return normalize_summary(rows)


class DimensionReport(Report):
    """Top rows grouped by one dimension, capped at row_limit."""
    output_keys = {
        'query': 'topQueries',
        'page': 'topPages'
    }

    def __init__(self, name, **kwargs):
        super().__init__(name, **kwargs)
        self.dimensions = [name]
        self.output_key = self.output_keys[name]

    def request_body(self):
        payloads = super().request_body()
        payloads['dimensions'] = self.dimensions
        if self.row_limit is not None:
            payloads['rowLimit'] = self.row_limit
        return payloads

    def normalize(self, rows):
        return normalize_rows(rows)


def get_report(name, **kwargs):
    if name == 'summary':
        return SummaryReport(name, **kwargs)
    return DimensionReport(name, **kwargs)
