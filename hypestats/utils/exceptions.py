class AppConfigException(Exception):
    """Exception for invalid or missing configuration. Fatal at startup."""

    pass


class HypeStatsFetchException(Exception):
    """Base exception for any per-request failure while fetching the hype stats records."""

    pass


class StoreConnectionException(HypeStatsFetchException):
    """Exception for failed attempts to create or reach the MongoDB client."""

    pass


class StoreQueryException(HypeStatsFetchException):
    """Exception for failed find / sort executions against the hype stats collection."""

    pass


class StatsSerializationException(HypeStatsFetchException):
    """Exception for hype stats records which cannot be encoded to JSON."""

    pass


class StatsTableException(Exception):
    """
    Exception for errors from StatsTable / subclasses.
    """

    pass
