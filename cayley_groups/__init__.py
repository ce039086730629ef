"""

cayley_groups
=============
A toolkit for validating finite Cayley tables and querying the groups they define.
"""

import logging

# errors
from .errors import (
    CayleyError,
    ValidationError,
    AxiomError,
    UnknownElementError,
    ClosureError,
)

# tables + axiom checks
from .table import Table
from .metrics import is_associative, is_rearrangable, associativity_fraction

# groups + subgroups
from .group import Group
from .subgroup import Subgroup, trivial_subgroup, whole_group

# builders
from .data import table_from_operation, cyclic_table, symmetric_table

# table cache
from .cache import TableCache, fingerprint_table

from .config import configure_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
configure_logging()

__all__ = [
    # errors
    "CayleyError",
    "ValidationError",
    "AxiomError",
    "UnknownElementError",
    "ClosureError",
    # tables
    "Table",
    "is_associative",
    "is_rearrangable",
    "associativity_fraction",
    # groups
    "Group",
    "Subgroup",
    "trivial_subgroup",
    "whole_group",
    # builders
    "table_from_operation",
    "cyclic_table",
    "symmetric_table",
    # cache
    "TableCache",
    "fingerprint_table",
    "configure_logging",
]
