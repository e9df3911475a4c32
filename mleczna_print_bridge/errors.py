"""
Print Bridge Errors
===================

Every error is terminal for the request that raised it; the caller
resubmits the job.
"""


class BridgeError(Exception):
    """Base class for errors reported back to the HTTP caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingTarget(BridgeError):
    """Neither an explicit IP nor a known printer name was given."""

    status_code = 400


class MalformedPayload(BridgeError):
    """Label data has a shape the formatter cannot handle."""

    status_code = 400


class DeliveryFailed(BridgeError):
    """Socket error or timeout while talking to the printer."""

    status_code = 500
