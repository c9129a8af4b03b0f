"""Translation of botocore errors into tag domain errors."""

from botocore.exceptions import (
    ClientError,
    ConnectionError as BotoConnectionError,
    HTTPClientError,
    NoCredentialsError,
)

from cloudtag.domain.tag.exceptions import (
    InvalidTagError,
    PermissionDeniedError,
    ProviderError,
    ResourceNotFoundError,
    TagManagerError,
    TransientNetworkError,
)

PERMISSION_CODES = {
    "UnauthorizedOperation",
    "AccessDenied",
    "AccessDeniedException",
    "AuthFailure",
}

TRANSIENT_CODES = {
    "RequestLimitExceeded",
    "Throttling",
    "ThrottlingException",
    "TooManyRequestsException",
    "InternalError",
    "ServerException",
    "ServiceUnavailable",
    "ServiceUnavailableException",
    "Unavailable",
}

INVALID_TAG_CODES = {
    "InvalidParameter",
    "InvalidParameterValue",
    "InvalidParameterException",
    "InvalidRequestException",
    "TagLimitExceeded",
    "BadRequestException",
}


def _is_not_found(code: str) -> bool:
    return code.endswith(".NotFound") or code.endswith(".Malformed") or code in (
        "ResourceNotFoundException",
        "NotFoundException",
    )


def translate_aws_error(error: Exception, resource_type: str, resource_id: str) -> TagManagerError:
    """Convert a botocore error to a TagManagerError."""
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        message = error.response.get("Error", {}).get("Message", str(error))

        if _is_not_found(code):
            return ResourceNotFoundError(resource_type, resource_id, details=message)
        if code in PERMISSION_CODES:
            return PermissionDeniedError(f"Permission denied for {resource_type} {resource_id}: {message}")
        if code in TRANSIENT_CODES:
            return TransientNetworkError(f"AWS {code} for {resource_type} {resource_id}: {message}")
        if code in INVALID_TAG_CODES:
            return InvalidTagError(f"Invalid tags for {resource_type} {resource_id}: {message}")
        return ProviderError(f"AWS error {code} for {resource_type} {resource_id}: {message}")

    if isinstance(error, NoCredentialsError):
        return PermissionDeniedError(f"No AWS credentials available: {error}")

    if isinstance(error, (BotoConnectionError, HTTPClientError)):
        return TransientNetworkError(f"Network error calling AWS for {resource_type} {resource_id}: {error}")

    return ProviderError(f"Unexpected AWS error for {resource_type} {resource_id}: {error}")
