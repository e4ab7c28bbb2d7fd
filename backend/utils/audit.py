import logging

logger = logging.getLogger("audit")

def write_log(*, action, resource, status="SUCCESS", ip=None, meta=None):
    logger.info("%s %s %s ip=%s meta=%s", action, resource, status, ip, meta or {})
