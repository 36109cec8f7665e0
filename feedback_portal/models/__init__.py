from .feedback_link import FeedbackLink
from .feedback import Feedback
from .admin_settings import AdminSettings, AdminSettingsRevision
from .admin_credential import AdminCredential

__all__ = [
    "FeedbackLink",
    "Feedback",
    "AdminSettings",
    "AdminSettingsRevision",
    "AdminCredential",
]
