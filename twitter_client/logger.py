import logging

logger = logging.getLogger('twitter_client')
logger.addHandler(logging.NullHandler())
