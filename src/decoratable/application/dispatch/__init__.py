"""Runtime dispatch of member access.

Dispatcher routes read/write/invoke to decorated chains; default_access
is the undecorated behavior those chains wrap.
"""

from decoratable.application.dispatch import default_access
from decoratable.application.dispatch.dispatcher import Dispatcher

__all__ = [
    "Dispatcher",
    "default_access",
]
