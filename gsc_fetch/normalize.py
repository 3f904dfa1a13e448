import pandas
from decimal import Decimal, ROUND_HALF_UP

CTR_PLACES = 4
POSITION_PLACES = 1
COUNT_FIELDS = ['clicks', 'impressions']
METRIC_FIELDS = COUNT_FIELDS + ['ctr', 'position']
ZERO_SUMMARY = {'clicks': 0, 'impressions': 0, 'ctr': 0, 'position': 0}


def round_half_up(value, places):
    """
        Round like round(value * 10**places) / 10**places would on paper.
        Going through the shortest repr keeps 4.35 at 4.4 instead of the 4.3
        binary floats give.
    """
    if value is None or pandas.isna(value):
        return 0.0
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def normalize_rows(rows):
    """Normalize Search Analytics rows, keeping the upstream order."""
    if not rows:
        return []
    df = pandas.DataFrame(rows, columns=['keys'] + METRIC_FIELDS)
    df['keys'] = df['keys'].apply(lambda keys: list(keys) if isinstance(keys, (list, tuple)) else [])
    df[COUNT_FIELDS] = df[COUNT_FIELDS].fillna(0).astype('int64')
    df['ctr'] = df['ctr'].apply(round_half_up, args=(CTR_PLACES,)).astype('float64')
    df['position'] = df['position'].apply(round_half_up, args=(POSITION_PLACES,)).astype('float64')
    return df.to_dict(orient='records')


def normalize_summary(rows):
    if not rows:
        return dict(ZERO_SUMMARY)
    summary = normalize_rows(rows[:1])[0]
    summary.pop('keys')
    return summary
