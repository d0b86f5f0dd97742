"""Scripted harness workflow."""

from vilkas_harness.workflow.runner import HarnessRunner, RoundRecord, RunReport
from vilkas_harness.workflow.selection import (
    CandidateSelector,
    LocalRankSelector,
    RemoteLookupSelector,
    create_selector,
    select_worst,
)

__all__ = [
    "HarnessRunner",
    "RoundRecord",
    "RunReport",
    "CandidateSelector",
    "LocalRankSelector",
    "RemoteLookupSelector",
    "create_selector",
    "select_worst",
]
