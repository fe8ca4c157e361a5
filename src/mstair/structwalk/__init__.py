"""
package: mstair.structwalk

Read, write and enumerate dotted paths in nested records and mappings.
"""

# <AUTOGEN_INIT>
from mstair.structwalk import (
    base,
    errors,
    walk,
    xlogging,
)


__all__ = [
    "base",
    "errors",
    "walk",
    "xlogging",
]
# </AUTOGEN_INIT>

from mstair.structwalk.base.types import MISSING
from mstair.structwalk.errors import PathNotFoundError, StructWalkError
from mstair.structwalk.walk.field_access import (
    field_value,
    require_field_value,
    set_field_value,
)
from mstair.structwalk.walk.field_list import field_list, field_list_no_sort
from mstair.structwalk.walk.getter_list import getter_list
from mstair.structwalk.walk.getter_resolver import getter_value
from mstair.structwalk.walk.node_kind import NodeKind, Ref, node_kind, unwrap
from mstair.structwalk.walk.path_resolver import Resolution, Slot, resolve


__all__ += [
    "MISSING",
    "NodeKind",
    "PathNotFoundError",
    "Ref",
    "Resolution",
    "Slot",
    "StructWalkError",
    "field_list",
    "field_list_no_sort",
    "field_value",
    "getter_list",
    "getter_value",
    "node_kind",
    "require_field_value",
    "resolve",
    "set_field_value",
    "unwrap",
]

__version__ = "0.1.0"
