import logging

logger = logging.getLogger("assertrite")
logger.setLevel(logging.INFO)
