"""Link reconciliation engine.

This module provides name mapping, link validation, duplicate
resolution, per-model planning, cleanup and run orchestration for the
LM Studio destination tree.
"""

from llamalink.linking.cleanup import CleanupWalker
from llamalink.linking.index import LinkIndex
from llamalink.linking.naming import UNKNOWN_AUTHOR, MappedName, map_model_name
from llamalink.linking.planner import LinkPlanner
from llamalink.linking.reconcile import Reconciler, RunReport
from llamalink.linking.report import StateReport, build_report
from llamalink.linking.validator import is_valid_link, is_valid_link_at, read_link_target

__all__ = [
    "UNKNOWN_AUTHOR",
    "CleanupWalker",
    "LinkIndex",
    "LinkPlanner",
    "MappedName",
    "Reconciler",
    "RunReport",
    "StateReport",
    "build_report",
    "is_valid_link",
    "is_valid_link_at",
    "map_model_name",
    "read_link_target",
]
