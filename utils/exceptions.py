from rest_framework import status
from rest_framework.exceptions import APIException


class OwnershipDenied(APIException):
    """
    Raised when an authenticated user touches a board or task they neither
    own nor belong to. Clients treat it the same as a missing session, so it
    answers 401 rather than 403.
    """
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized'
    default_code = 'unauthorized'
