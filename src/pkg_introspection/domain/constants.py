from enum import Enum


class HeaderName(str, Enum):
    AUTHORIZATION = "Authorization"
    CONTENT_TYPE = "content-type"
    HOST = "Host"
    WWW_AUTHENTICATE = "WWW-Authenticate"


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
BEARER_CHALLENGE = 'Bearer realm="oauth2"'

DEFAULT_TOKEN_HEADER = HeaderName.AUTHORIZATION.value
DEFAULT_TOKEN_PREFIX = "Bearer "

HTTP_200_OK = 200
HTTP_401_UNAUTHORIZED = 401
HTTP_500_INTERNAL_SERVER_ERROR = 500
