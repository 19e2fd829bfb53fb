"""Logging configuration for the API.

Records go to a rotating JSON file and a human-readable console. Resource
endpoints attach ``resource``, ``operation`` and ``record_id`` through
``extra={'extra_fields': {...}}``; inside a request the HTTP method and path
are added as well, so one JSON line tells which API call touched which record.
"""
import logging
import os
import json
from logging.handlers import RotatingFileHandler
from flask import has_request_context, request
from eshs_shared.schemas import format_timestamp
from eshs_shared.models import now

# Storage and HTTP client libraries are chatty at INFO
QUIET_LOGGERS = ('werkzeug', 'sqlalchemy.engine', 'urllib3', 'botocore', 'boto3', 'libcloud')


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, timestamps in the API's ``...mmmZ`` form."""

    def format(self, record):
        log_entry = {
            'timestamp': format_timestamp(now()),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if has_request_context():
            log_entry['method'] = request.method
            log_entry['path'] = request.path

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, default=str)


def setup_logging():
    """Install the file and console handlers on the root logger.

    ``LOG_LEVEL`` and ``LOG_DIR`` come from the environment; calling this again
    replaces the handlers instead of stacking them.
    """
    log_level_str = os.getenv('LOG_LEVEL', 'INFO').upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    logs_dir = os.getenv('LOG_DIR', os.path.join(os.path.dirname(__file__), '..', 'logs'))
    os.makedirs(logs_dir, exist_ok=True)
    log_file = os.path.join(logs_dir, 'eshs_api.log')

    file_handler = RotatingFileHandler(log_file, maxBytes=10*1024*1024, backupCount=5)
    file_handler.setFormatter(StructuredFormatter())

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)-8s %(name)-20s %(message)s'))

    logger = logging.getLogger()
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging initialized", extra={
        'extra_fields': {'log_level': log_level_str, 'log_file': log_file}
    })
    return logger
