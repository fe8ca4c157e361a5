"""
package: mstair.structwalk.base
"""

# <AUTOGEN_INIT>
from mstair.structwalk.base import (
    config,
    context_managers,
    types,
)


__all__ = [
    "config",
    "context_managers",
    "types",
]
# </AUTOGEN_INIT>
