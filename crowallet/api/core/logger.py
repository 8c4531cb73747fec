import logging

logger = logging.getLogger("crowallet.api")
