"""Domain errors and failure typing."""


class GeocodeBatchError(Exception):
    """Base class for geocode-batch failures."""

    error_code = "GEOCODE_BATCH_ERROR"


class ConfigError(GeocodeBatchError):
    """Raised for invalid or missing startup configuration."""

    error_code = "CONFIG_ERROR"


class QueryError(GeocodeBatchError):
    """Raised when a single provider query yields no usable match list."""

    error_code = "QUERY_ERROR"


class TransportError(QueryError):
    """The request never reached the provider or got no answer."""

    error_code = "TRANSPORT_ERROR"


class HttpStatusError(QueryError):
    """The provider kept answering with a transient failure status."""

    error_code = "HTTP_STATUS_ERROR"


class BodyReadError(QueryError):
    """The response arrived but its body could not be read."""

    error_code = "BODY_READ_ERROR"


class EmptyResponseError(QueryError):
    """The provider answered with a zero-byte body."""

    error_code = "EMPTY_RESPONSE"


class DecodeError(QueryError):
    """The body is not a JSON array of location objects."""

    error_code = "DECODE_ERROR"
