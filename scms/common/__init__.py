"""
Общие утилиты, константы, исключения и логгер.
"""

from scms.common.logger import get_logger, log_info, log_error, log_warning, log_debug
from scms.common.constants import TypeMsg
from scms.common.exceptions import SCMSError, NotFoundError

__all__ = [
    "get_logger",
    "log_info",
    "log_error",
    "log_warning",
    "log_debug",
    "TypeMsg",
    "SCMSError",
    "NotFoundError",
]
