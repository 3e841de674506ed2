# src/logkit/constants.py
"""
Constants shared by the record models, the formatters and the sinks.

  - LogType: the four record kinds. Their values double as the default
    context tag of the specialized logging operations.
  - Severity: the five severity tags written at the start of every line.
  - VERBOSE_LEVEL: numeric stdlib logging level used for VERBOSE lines
    (between DEBUG=10 and INFO=20).
"""

from enum import Enum


class LogType(str, Enum):
    """Record kinds understood by the LoggingService."""
    API_REQUEST = "API_REQUEST"     # incoming HTTP request
    API_RESPONSE = "API_RESPONSE"   # outgoing HTTP response
    QUERY = "QUERY"                 # database statement
    ERROR = "ERROR"                 # application error


class Severity(str, Enum):
    """Severity tags. Not filterable inside logkit; see the logging backend for that."""
    LOG = "LOG"
    ERROR = "ERROR"
    WARN = "WARN"
    DEBUG = "DEBUG"
    VERBOSE = "VERBOSE"


VERBOSE_LEVEL = 15

__all__ = ["LogType", "Severity", "VERBOSE_LEVEL"]
