"""td-client - client library for the Treasure Data REST API."""

from loguru import logger

__version__ = "0.1.0"

# Library code stays quiet until an application opts in via setup_logging()
logger.disable("td_client")
