from .http_response import api_error as api_error
from .http_response import api_response as api_response
from .logger import get_logger as get_logger
from .validators import to_uint as to_uint
