import logging

# Create the library logger
logger = logging.getLogger("pagerflow")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def describe_error(error: BaseException) -> str:
    """
    Returns a human readable message for an error.
    Falls back to the exception class name when the error carries no message.
    """
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or type(error).__name__
