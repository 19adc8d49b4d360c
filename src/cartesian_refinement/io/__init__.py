"""Import classes and definitions used for input/output or user interfaces."""

from .logging import configure_logging as configure_logging
from .logging import console as console
from .logging import log_debug as log_debug
from .logging import log_error as log_error
from .logging import log_info as log_info
from .logging import log_warning as log_warning
from .yaml_utils import export_yaml_data as export_yaml_data
from .yaml_utils import load_yaml_data as load_yaml_data
