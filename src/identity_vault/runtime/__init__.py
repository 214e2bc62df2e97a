"""
Runtime support for the identity vault: errors, configuration and encodings.
"""

from .errors import *
from .config import VaultConfig, get_default_config, set_default_config, resolve_config
from .encoding import b64encode, b64decode, hex_prefix
