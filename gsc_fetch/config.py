import os
import singer

from .errors import ConfigNotFoundError, ConfigIncompleteError

logger = singer.get_logger()

CONFIG_FILENAME = '.gsc-config.json'
DEFAULT_RANGE = '28d'
DEFAULT_LIMIT = 25

REQUIRED_FIELDS = [
    ('siteUrl', 'The GSC property URL. Use sc-domain:yourdomain.com for Domain properties '
                'or https://yourdomain.com/ for URL-prefix properties.'),
    ('client_id', 'OAuth2 Client ID from Google Cloud Console (APIs & Services > Credentials).'),
    ('client_secret', 'OAuth2 Client Secret from Google Cloud Console (APIs & Services > Credentials).'),
    ('refresh_token', 'Refresh token obtained via https://developers.google.com/oauthplayground/ '
                      'using the Search Console API v3 scope.'),
]


def parent_dirs(start_dir=None):
    """Yield start_dir, then each parent up to the filesystem root."""
    directory = os.path.abspath(start_dir or os.getcwd())
    while True:
        yield directory
        parent = os.path.dirname(directory)
        if parent == directory:
            return
        directory = parent


def find_config(start_dir=None):
    for directory in parent_dirs(start_dir):
        path = os.path.join(directory, CONFIG_FILENAME)
        if not os.path.isfile(path):
            continue
        try:
            singer.utils.load_json(path)
        except (OSError, ValueError) as e:
            logger.warning(f'Skipping unreadable config {path}: {e}')
            continue
        return path
    return None


def load_config(path=None, start_dir=None):
    """
        Load the config from an explicit path, or from the first
        .gsc-config.json found walking up from start_dir.
    """
    if path is None:
        path = find_config(start_dir)
        if path is None:
            raise ConfigNotFoundError(f'{CONFIG_FILENAME} not found in project root or any parent directory.')
    elif not os.path.isfile(path):
        raise ConfigNotFoundError(f'{path} not found.')

    logger.info(f'Using config: {path}')
    try:
        return singer.utils.load_json(path)
    except ValueError as e:
        raise ConfigNotFoundError(f'{path} is not valid JSON: {e}') from e


def validate_config(config, site_url_override=None):
    if not isinstance(config, dict):
        raise ConfigIncompleteError(f'{CONFIG_FILENAME} must hold a JSON object',
                                    [key for key, _ in REQUIRED_FIELDS
                                     if not (site_url_override and key == 'siteUrl')])
    missing = [(key, hint) for key, hint in REQUIRED_FIELDS
               if not (site_url_override and key == 'siteUrl') and not config.get(key)]
    if missing:
        details = '\n'.join(f'  - {key}: {hint}' for key, hint in missing)
        raise ConfigIncompleteError(f'Missing required field(s) in {CONFIG_FILENAME}:\n{details}',
                                    [key for key, _ in missing])


def get_defaults(config):
    defaults = config.get('defaults') or {}
    if not isinstance(defaults, dict):
        raise ConfigIncompleteError(f'defaults in {CONFIG_FILENAME} must be an object', ['defaults'])
    try:
        limit = int(defaults.get('limit') or DEFAULT_LIMIT)
    except (TypeError, ValueError) as e:
        raise ConfigIncompleteError(f'defaults.limit in {CONFIG_FILENAME} must be an integer: {e}',
                                    ['defaults.limit']) from e
    return {
        'range': defaults.get('range') or DEFAULT_RANGE,
        'limit': limit,
    }


def check_gitignore(start_dir=None):
    """
        Warn when the nearest .gitignore does not list the config file.
        Returns False only in that case.
    """
    for directory in parent_dirs(start_dir):
        path = os.path.join(directory, '.gitignore')
        try:
            with open(path, encoding='utf-8', errors='replace') as fil:
                content = fil.read()
        except OSError:
            continue
        if CONFIG_FILENAME not in content:
            logger.warning(f'{CONFIG_FILENAME} is not in your .gitignore. This file contains credentials and '
                           f'should never be committed. Add {CONFIG_FILENAME} to your .gitignore file.')
            return False
        return True
    return True
