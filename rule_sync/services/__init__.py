"""
Business logic services for rule sync.
"""

from rule_sync.services.file_store import RemoteFileStore
from rule_sync.services.rule_editor import RuleSetEditor
from rule_sync.services.status_aggregator import StatusAggregator

__all__ = [
    "RemoteFileStore",
    "RuleSetEditor",
    "StatusAggregator",
]
