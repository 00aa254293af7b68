from .exceptions import (
    MetaheuristicError, GeneratorExhausted, InvalidConfigurationError, UserCallbackFailure
)
from .logger import setup_logger, get_logger
from .profiler import SearchProfiler
from .validators import ConfigValidator

__all__ = [
    'MetaheuristicError', 'GeneratorExhausted', 'InvalidConfigurationError',
    'UserCallbackFailure', 'setup_logger', 'get_logger', 'SearchProfiler',
    'ConfigValidator',
]
