import json
import sys
import argparse
import singer
from .client import SearchConsoleClient
from .config import load_config, validate_config, get_defaults, check_gitignore
from .dates import resolve_date_range, to_utc
from .errors import GscFetchError
from .reports import REPORT_TYPES, reports_for_type, get_report

logger = singer.get_logger()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Fetch Google Search Console performance metrics as JSON.')
    parser.add_argument('--type', dest='report_type', choices=list(REPORT_TYPES), default='all',
                        help='Report to fetch')
    parser.add_argument('--siteUrl', dest='site_url', help='Override the siteUrl from the config file')
    parser.add_argument('--range', dest='range', help='7d, 28d, 3m, 6m, 12m or YYYY-MM-DD,YYYY-MM-DD')
    parser.add_argument('--limit', dest='limit', type=int, help='Row limit for query and page reports')
    parser.add_argument('--config', dest='config', help='Config file path, skips the upward search')
    return parser.parse_args(argv)


def run(args, now=None, start_dir=None):
    config = load_config(args.config, start_dir=start_dir)
    validate_config(config, site_url_override=args.site_url)
    check_gitignore(start_dir)

    defaults = get_defaults(config)
    site_url = args.site_url or config['siteUrl']
    range_token = args.range or defaults['range']
    limit = args.limit if args.limit is not None else defaults['limit']

    now = to_utc(now or singer.utils.now())
    date_range = resolve_date_range(range_token, now=now)
    logger.info(f'Fetching {args.report_type} for {site_url}: {date_range["startDate"]} to {date_range["endDate"]}')

    result = {
        'metadata': {
            'siteUrl': site_url,
            'dateRange': date_range,
            'range': range_token,
            'fetchedAt': singer.utils.strftime(now),
        }
    }

    client = SearchConsoleClient(config['client_id'], config['client_secret'], config['refresh_token'])
    with client:
        for report_name in reports_for_type(args.report_type):
            report = get_report(report_name, client=client, site_url=site_url,
                                date_range=date_range, row_limit=limit)
            result[report.output_key] = report.sync()
    return result


@singer.utils.handle_top_exception(logger)
def main(argv=None):
    args = parse_args(argv)
    try:
        result = run(args)
    except GscFetchError as e:
        logger.error(f'{e.kind}: {e.message}')
        print(json.dumps(e.to_dict()))
        sys.exit(1)

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write('\n')


if __name__ == "__main__":
    main()
