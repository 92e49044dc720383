"""
Alert models.

Alerts are the only input to the downstream notification feed, so their
ordering (Red before Yellow, then descending |value|) is part of the contract.
"""

from pydantic import Field

from .enums import AlertSeverity, AlertType
from .records import EngineModel


class Alert(EngineModel):
    """
    A threshold-triggered risk alert for one state.

    Attributes:
        state: State the alert was raised for
        alert_type: Rule that fired (serialized as ``type``)
        severity: Red or Yellow
        message: Human-readable description of the trigger
        value: Triggering magnitude (inflation %, cumulative rise %, or growth %)
    """

    state: str
    alert_type: AlertType = Field(alias="type")
    severity: AlertSeverity
    message: str
    value: float
