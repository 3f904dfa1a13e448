import singer
from datetime import timedelta, timezone
from dateutil.relativedelta import relativedelta

logger = singer.get_logger()

# Search Console data is considered available up to 3 days ago
REPORTING_LAG_DAYS = 3
DEFAULT_RANGE = '28d'
DATE_FMT = '%Y-%m-%d'

RANGE_OFFSETS = {
    '7d': relativedelta(days=7),
    '28d': relativedelta(days=28),
    '3m': relativedelta(months=3),
    '6m': relativedelta(months=6),
    '12m': relativedelta(years=1),
}


def is_literal_range(range_token):
    return ',' in range_token


def to_utc(now):
    """Naive datetimes are taken as UTC already, aware ones are converted."""
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def resolve_date_range(range_token, now=None):
    """
        Turn a range token into {'startDate', 'endDate'}, both inclusive.

        - 'YYYY-MM-DD,YYYY-MM-DD' is passed through as is, without any calendar check.
        - '7d', '28d', '3m', '6m', '12m' count back from the end date, which is
          `now` minus REPORTING_LAG_DAYS. Month and year offsets clamp to the last
          day of the target month (2024-05-31 minus 3m gives 2024-02-29).
        - anything else behaves like DEFAULT_RANGE.
    """
    if is_literal_range(range_token):
        start_date, end_date = range_token.split(',')[:2]
        return {'startDate': start_date, 'endDate': end_date}

    now = to_utc(now or singer.utils.now())
    end = now.date() - timedelta(days=REPORTING_LAG_DAYS)

    offset = RANGE_OFFSETS.get(range_token)
    if offset is None:
        logger.warning(f'Unrecognized range "{range_token}", falling back to {DEFAULT_RANGE}')
        offset = RANGE_OFFSETS[DEFAULT_RANGE]
    start = end - offset

    return {'startDate': start.strftime(DATE_FMT), 'endDate': end.strftime(DATE_FMT)}
