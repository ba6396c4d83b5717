from booking_core.workflows.admin import AdminModerationWorkflow, ModerationResult
from booking_core.workflows.booking import BookingOutcome, BookingWorkflow
from booking_core.workflows.contact import ContactResult, ContactWorkflow

__all__ = [
    "AdminModerationWorkflow",
    "ModerationResult",
    "BookingOutcome",
    "BookingWorkflow",
    "ContactResult",
    "ContactWorkflow",
]
