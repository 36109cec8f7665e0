from feedback_portal.services.credentials import MIN_PASSWORD_LENGTH
from feedback_portal.services.errors import ConflictError, NotFoundError, ServiceError

_FIELD_MESSAGES = {
    "customerNumber": "Bitte geben Sie eine Kundennummer ein.",
    "concern": "Bitte wählen Sie ein gültiges Anliegen aus.",
    "firstName": "Bitte geben Sie einen Vornamen ein.",
    "lastName": "Bitte geben Sie einen Nachnamen ein.",
    "domains": "Bitte geben Sie gültige Domains mit http:// oder https:// an.",
    "concern_types": "Anliegen dürfen weder leer noch doppelt sein.",
    "concern_texts": "Die Texte je Anliegen sind ungültig.",
    "username": "Bitte geben Sie einen Benutzernamen ein.",
    "password": f"Das Passwort muss mindestens {MIN_PASSWORD_LENGTH} Zeichen lang sein.",
}


def form_error_message(exc: ServiceError) -> str:
    """German flash text for a service error raised by an admin form."""
    field = getattr(exc, "field", None)
    if field in _FIELD_MESSAGES:
        return _FIELD_MESSAGES[field]
    if isinstance(exc, ConflictError):
        return "Zu diesem Link liegt bereits Feedback vor. Er kann nicht gelöscht werden."
    if isinstance(exc, NotFoundError):
        return "Der Feedback-Link wurde nicht gefunden."
    return "Die Eingaben konnten nicht gespeichert werden."
