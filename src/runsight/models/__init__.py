"""Data models for runsight."""

from runsight.models.descriptors import CaseDescriptor, OutcomeDescriptor, build_record
from runsight.models.result import ErrorDetail, RecordStatus, ResultRecord, StepDetail
from runsight.models.summary import RunSummary

__all__ = [
    "CaseDescriptor",
    "ErrorDetail",
    "OutcomeDescriptor",
    "RecordStatus",
    "ResultRecord",
    "RunSummary",
    "StepDetail",
    "build_record",
]
