# sdk/contact.py
import logging
import re
from typing import Any, Dict, List

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_MESSAGE_LENGTH = 300
CONFIRMATION = "Contact request sent successfully"


class ContactFormError(Exception):
    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        fields = ", ".join(".".join(str(p) for p in e["loc"]) for e in errors)
        super().__init__(f"invalid contact form: {fields}")


class ContactForm(BaseModel):
    email: str
    message: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        v = v.strip()
        if not EMAIL_RE.match(v):
            raise ValueError("not a valid email address")
        return v


def submit_contact(data: Dict[str, Any]) -> str:
    """Validate a contact request and return the confirmation shown to the user."""
    try:
        form = ContactForm.model_validate(data)
    except ValidationError as e:
        raise ContactFormError(e.errors()) from e
    logger.info("Contact form submitted by %s (%d chars)", form.email, len(form.message))
    return CONFIRMATION
