"""
package: mstair.structwalk.walk
"""

# <AUTOGEN_INIT>
from mstair.structwalk.walk import (
    field_access,
    field_list,
    getter_list,
    getter_resolver,
    getters,
    node_kind,
    path_resolver,
)


__all__ = [
    "field_access",
    "field_list",
    "getter_list",
    "getter_resolver",
    "getters",
    "node_kind",
    "path_resolver",
]
# </AUTOGEN_INIT>
