class GscFetchError(Exception):
    """
        Base of every terminal error. `kind` is the error code printed in the
        JSON payload on stdout.
    """
    kind = 'GSC_FETCH_ERROR'

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        payload = {'error': self.kind, 'message': self.message}
        payload.update({key: value for key, value in self.details.items() if value is not None})
        return payload

class ConfigNotFoundError(GscFetchError):
    kind = 'CONFIG_NOT_FOUND'

class ConfigIncompleteError(GscFetchError):
    kind = 'CONFIG_INCOMPLETE'

    def __init__(self, message, missing_fields):
        super().__init__(message, missingFields=list(missing_fields))
        self.missing_fields = list(missing_fields)

class TokenRefreshError(GscFetchError):
    kind = 'TOKEN_REFRESH_FAILED'

class GscApiError(GscFetchError):
    kind = 'GSC_API_ERROR'
