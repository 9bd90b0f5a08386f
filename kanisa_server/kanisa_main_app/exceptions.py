"""Typed API errors shared by every service, plus the DRF handler that renders them"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ValidationError(APIException):
    """Malformed or missing input, or a failed precondition"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'validation_error'


class UnauthorizedError(APIException):
    """Bad credentials or an invalid / expired one-time code"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized.'
    default_code = 'unauthorized'


class ForbiddenError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Not allowed.'
    default_code = 'forbidden'


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class ConflictError(APIException):
    """A unique field is already taken"""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Already exists.'
    default_code = 'conflict'


class ServiceUnavailableError(APIException):
    """A required third-party integration is not configured"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Service temporarily unavailable.'
    default_code = 'service_unavailable'


class UpstreamError(APIException):
    """A third-party gateway answered with a non-success status"""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Upstream service error.'
    default_code = 'upstream_error'

    def __init__(self, detail=None, code=None, status_code=None):
        super().__init__(detail, code)
        if status_code is not None:
            self.status_code = status_code


def api_exception_handler(exc, context):
    """Render API errors as {"error": CODE, "message": text}"""
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and 'detail' in data:
        code = getattr(data['detail'], 'code', None) or 'error'
        response.data = {
            'error': str(code).upper(),
            'message': str(data['detail']),
        }
    else:
        # serializer field errors
        response.data = {
            'error': 'VALIDATION_ERROR',
            'message': 'Invalid request data.',
            'fields': data,
        }

    if response.status_code >= 500:
        logger.error(f'[API] {response.status_code} {response.data["error"]}: {response.data["message"]}')
    return response
