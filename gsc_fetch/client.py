import singer
import requests
from urllib.parse import quote

from .errors import TokenRefreshError, GscApiError

logger = singer.get_logger()
BASE_API_URL = 'https://www.googleapis.com/webmasters/v3/sites'
GOOGLE_TOKEN_URI = 'https://oauth2.googleapis.com/token'


class SearchConsoleClient:
    """
        Handle google oauth2 and requests to the Search Console API
        API method used:
        'searchanalytics.query': https://developers.google.com/webmaster-tools/v1/searchanalytics/query
    """
    def __init__(self, client_id, client_secret, refresh_token=None, access_token=None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_token = refresh_token
        self.access_token = access_token
        self.session = requests.Session()

    def __enter__(self):
        if self.refresh_token:
            self.get_access_token()
        return self

    def __exit__(self, *args):
        self.session.close()

    def get_access_token(self):
        if self.access_token is not None:
            return

        payloads = {
            'grant_type': 'refresh_token',
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'refresh_token': self.refresh_token
        }
        try:
            response = self.session.post(url=GOOGLE_TOKEN_URI, data=payloads)
        except requests.RequestException as e:
            raise TokenRefreshError(f'Token refresh failed: {e}') from e

        logger.info(f'request token: {GOOGLE_TOKEN_URI}, response status: {response.status_code}')
        if not response.ok:
            raise TokenRefreshError(f'Token refresh failed ({response.status_code}): {response.text}',
                                    status=response.status_code)

        try:
            access_token = response.json().get('access_token')
        except ValueError as e:
            raise TokenRefreshError(f'Token refresh failed ({response.status_code}): invalid JSON response: {e}',
                                    status=response.status_code) from e
        if not access_token:
            raise TokenRefreshError('Token refresh failed: no access_token in response', status=response.status_code)
        self.access_token = access_token

    def do_request(self, url, payload):
        self.get_access_token()

        headers = {
            'Authorization': f'Bearer {self.access_token}',
            'Content-Type': 'application/json'
        }
        try:
            response = self.session.post(url=url, json=payload, headers=headers)
        except requests.RequestException as e:
            raise GscApiError(f'GSC API error: {e}') from e

        logger.info(f'request api: {url}, response status: {response.status_code}')
        if not response.ok:
            raise GscApiError(f'GSC API error ({response.status_code}): {response.text}',
                              status=response.status_code)
        return response

    def query_url(self, site_url):
        # domain properties look like 'sc-domain:example.com', so nothing is left unescaped
        return f'{BASE_API_URL}/{quote(site_url, safe="")}/searchAnalytics/query'

    def query(self, site_url, body):
        response = self.do_request(self.query_url(site_url), body)
        try:
            resp = response.json()
        except ValueError as e:
            raise GscApiError(f'GSC API error ({response.status_code}): invalid JSON response: {e}',
                              status=response.status_code) from e
        return resp.get('rows') or []
