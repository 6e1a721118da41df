from fieldparam.param import Param
from fieldparam.models import ValidationResult
from fieldparam.errors import ParamError, ParamConfigError, ParamValidationError
from fieldparam.utils import is_set
from fieldparam.logging_config import setup_logging, get_logger

__all__ = [
    "Param", "ValidationResult",
    "ParamError", "ParamConfigError", "ParamValidationError",
    "is_set", "setup_logging", "get_logger",
]
